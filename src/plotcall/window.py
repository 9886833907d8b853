# src/plotcall/window.py
"""
PlotWindow: a stateful front end over one transport.

A window owns the persistent plot options, the cumulative curve-option
accumulator and the resolved form of its last call (for ``replot``). Each
call is fully resolved and validated before the first byte reaches the
transport; emission then runs under a bounded wait.

A stalled emission is abandoned: its worker is fenced off from the
transport and the window refuses to plot again until ``restart()``.
"""
from __future__ import annotations

import threading
from typing import Any, List, Mapping, Optional, Sequence

from plotcall.config import PlotcallConfig, load_config
from plotcall.errors import TransportTimeout
from plotcall.options.state import OptionState
from plotcall.pipeline.command import render_plan
from plotcall.pipeline.plan import PlotPlan, resolve_call
from plotcall.pipeline.serialize import serialize_plan
from plotcall.transport import Transport

__all__ = ["PlotWindow"]


class _Abandoned(Exception):
    """Stops a timed-out emission worker at its next transport call."""


class _FencedTransport:
    """Forwards to ``transport`` until fenced; records the emission stage."""

    def __init__(self, transport: Transport):
        self.transport = transport
        self.fenced = False
        self.stage = "command"

    def _check(self) -> None:
        if self.fenced:
            raise _Abandoned()

    def send(self, command: str) -> None:
        self._check()
        self.transport.send(command)

    def send_row(self, values: Sequence[float]) -> None:
        self._check()
        self.stage = "data"
        self.transport.send_row(values)

    def end_curve(self) -> None:
        self._check()
        self.transport.end_curve()


class PlotWindow:
    """
    Plot through ``transport``.

    Keyword arguments are persistent plot options (``title``, ``xrange``,
    ...); use ``options()`` for names that are not Python identifiers,
    e.g. ``win.options({"3d": True})``.

    Example:
        >>> win = PlotWindow(RecordingTransport(), title="decay")
        >>> win.plot({"legend": ["a", "b"]}, t, np.stack([a, b], axis=1))
    """

    def __init__(self, transport: Transport, *, config: PlotcallConfig | None = None, **plot_options: Any):
        self.transport = transport
        self.config = config if config is not None else load_config()
        self.plot_state = OptionState("global", plot_options)
        self.curve_state = OptionState("curve")
        self.last_command: Optional[str] = None
        self._last_plan: Optional[PlotPlan] = None
        self._last_curve_state: Optional[OptionState] = None
        self._stalled: Optional[threading.Thread] = None
        self._needs_restart = False
        self._closed = False

    # ---- plotting -----------------------------------------------------------
    def plot(self, *args: Any) -> PlotPlan:
        """Resolve, validate, render and emit one plot call."""
        return self._plot(list(args))

    def plot3d(self, *args: Any) -> PlotPlan:
        return self._plot([{"3d": True}, *args])

    def lines(self, *args: Any) -> PlotPlan:
        """``plot`` with ``lines`` as the call's default style."""
        return self._plot([{"globalwith": "lines"}, *args])

    def points(self, *args: Any) -> PlotPlan:
        """``plot`` with ``points`` as the call's default style."""
        return self._plot([{"globalwith": "points"}, *args])

    def replot(self, *args: Any) -> PlotPlan:
        """Re-issue the previous call with ``args`` added after it.

        The previous call's plot options are kept (new ones override them)
        and the curve accumulator restarts from where it stood before that
        call, so cumulative curve options resolve the same way again. Bare
        data in ``args`` starts a new curve group.
        """
        return self._replot(list(args), ephemeral=False)

    def markup(self, *args: Any) -> PlotPlan:
        """Like ``replot``, but ``args`` are not remembered: the next
        ``replot`` starts again from the last non-markup call."""
        return self._replot(list(args), ephemeral=True)

    @property
    def busy(self) -> bool:
        """True while an abandoned (timed-out) emission is still running."""
        return self._stalled is not None and self._stalled.is_alive()

    # ---- state --------------------------------------------------------------
    def options(self, mapping: Mapping[str, Any] | None = None, **kw: Any) -> "PlotWindow":
        """Merge persistent plot options; a ``None`` value removes one."""
        self._check_open()
        fragment = dict(mapping or {})
        fragment.update(kw)
        self.plot_state.merge(fragment)
        return self

    def reset(self) -> None:
        self.plot_state.clear()
        self.curve_state.clear()
        self.last_command = None
        self._last_plan = None
        self._last_curve_state = None

    def restart(self) -> None:
        """Restart the engine behind the transport; window state is kept.

        Clears the stall left by a ``TransportTimeout``. An abandoned worker
        that is still blocked can no longer reach the transport.
        """
        self._check_open()
        restart = getattr(self.transport, "restart", None)
        if callable(restart):
            restart()
        self._stalled = None
        self._needs_restart = False

    def close(self) -> None:
        if self._closed:
            return
        self.reset()
        close = getattr(self.transport, "close", None)
        if callable(close):
            close()
        self._closed = True

    def __enter__(self) -> "PlotWindow":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    # ---- internals ----------------------------------------------------------
    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError("PlotWindow is closed")

    def _check_ready(self) -> None:
        self._check_open()
        if self._needs_restart:
            raise RuntimeError(
                "The transport stalled during an earlier plot and its data stream is "
                "incomplete; call restart() before plotting again"
            )

    def _replot(self, args: List[Any], *, ephemeral: bool) -> PlotPlan:
        self._check_ready()
        if self._last_plan is None:
            raise RuntimeError("Nothing to replot: this window has not plotted yet")
        return self._plot(args, replay=self._last_plan, start=self._last_curve_state, ephemeral=ephemeral)

    def _plot(
        self,
        args: List[Any],
        *,
        replay: Optional[PlotPlan] = None,
        start: Optional[OptionState] = None,
        ephemeral: bool = False,
    ) -> PlotPlan:
        self._check_ready()
        start = start if start is not None else self.curve_state
        plan = resolve_call(
            args,
            curve_state=start,
            plot_state=self.plot_state,
            config=self.config,
            replay=replay,
        )
        command = render_plan(plan)

        # validated: commit window state before touching the transport
        if not ephemeral:
            self.curve_state = plan.curve_state
            self._last_plan = plan
            self._last_curve_state = start.copy()
        self.last_command = command

        self._emit(plan, command)
        return plan

    def _emit(self, plan: PlotPlan, command: str) -> None:
        timeout = self.config.timeout
        if timeout is None:
            self.transport.send(command)
            serialize_plan(plan, self.transport, jit=self.config.jit)
            return

        fenced = _FencedTransport(self.transport)
        errors: List[BaseException] = []

        def target() -> None:
            try:
                fenced.send(command)
                serialize_plan(plan, fenced, jit=self.config.jit)
            except _Abandoned:
                return
            except BaseException as e:
                errors.append(e)

        worker = threading.Thread(target=target, name="plotcall-emit", daemon=True)
        worker.start()
        worker.join(timeout)
        if worker.is_alive():
            fenced.fenced = True
            self._stalled = worker
            self._needs_restart = True
            raise TransportTimeout(timeout, fenced.stage)
        if errors:
            raise errors[0]
