# MIT License (see LICENSE)
"""
Renderer adapters for simulation visualization.

This module provides an abstract base class for rendering frame
snapshots and a few concrete implementations. Streamline geometry is
incremental: each snapshot only carries what was traced during that
frame, so a real renderer draws it onto a persistent field layer and
redraws the bodies on a layer cleared every frame.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, TextIO
import sys

from ..tracer import StreamlineFrame
from ..types import BodyPose

if TYPE_CHECKING:
    from ..simulation import FrameSnapshot


class RendererAdapter(ABC):
    """
    Abstract base class for renderer implementations.

    Subclasses should implement the drawing methods to integrate with
    various graphics backends (matplotlib, pyglet, web frontend, etc.).

    Usage:
        renderer = MyRenderer()
        renderer.render_snapshot(sim.step_frame())
    """

    @abstractmethod
    def begin_frame(self, time: float) -> None:
        """
        Begin a new frame for rendering.

        Args:
            time: Current simulation time in seconds.
        """
        ...

    @abstractmethod
    def draw_streamline(self, piece: StreamlineFrame) -> None:
        """Draw the polyline and marks traced by one tracer this frame."""
        ...

    @abstractmethod
    def draw_body(self, pose: BodyPose) -> None:
        """Draw a single dynamic body."""
        ...

    @abstractmethod
    def end_frame(self) -> None:
        """Finalize the current frame."""
        ...

    def render_snapshot(self, snapshot: "FrameSnapshot") -> None:
        """
        Convenience method to render a whole snapshot.

        Streamlines are drawn first so bodies sit on top of them.
        """
        self.begin_frame(snapshot.time)
        for piece in snapshot.streamlines:
            self.draw_streamline(piece)
        for pose in snapshot.bodies:
            self.draw_body(pose)
        self.end_frame()


class DebugRenderer(RendererAdapter):
    """
    Console/text debug renderer for development and testing.

    Output:
        === Frame t=0.0333 ===
        ~ tracer 0: 10 segments, 1 marks, end (0.26, 0.00)
        [1] point @ (0.50, 0.30)
        [2] dipole @ (-1.00, 0.00) θ=0.12
    """

    def __init__(self, output: TextIO | None = None, verbose: bool = True):
        """
        Initialize the debug renderer.

        Args:
            output: Output stream (defaults to sys.stdout).
            verbose: If True, also list streamline pieces.
        """
        self.output = output or sys.stdout
        self.verbose = verbose

    def begin_frame(self, time: float) -> None:
        self.output.write(f"=== Frame t={time:.4f} ===\n")

    def draw_streamline(self, piece: StreamlineFrame) -> None:
        if not self.verbose:
            return
        end = piece.points[-1]
        self.output.write(
            f"~ tracer {piece.tracer}: {len(piece.points) - 1} segments, "
            f"{len(piece.marks)} marks, end ({end[0]:.2f}, {end[1]:.2f})\n"
        )

    def draw_body(self, pose: BodyPose) -> None:
        pos = pose.position
        line = f"[{pose.id}] {pose.kind} @ ({pos[0]:.2f}, {pos[1]:.2f})"
        if pose.kind == "dipole":
            line += f" θ={pose.angle:.2f}"
        self.output.write(line + "\n")

    def end_frame(self) -> None:
        self.output.write("\n")
        self.output.flush()


class NullRenderer(RendererAdapter):
    """
    No-op renderer that does nothing.

    Useful as a placeholder or for performance testing without rendering overhead.
    """

    def begin_frame(self, time: float) -> None:
        pass

    def draw_streamline(self, piece: StreamlineFrame) -> None:
        pass

    def draw_body(self, pose: BodyPose) -> None:
        pass

    def end_frame(self) -> None:
        pass


class BufferedRenderer(RendererAdapter):
    """
    Renderer that buffers frame data for later retrieval.

    Stores body poses for each frame and the full streamline polylines
    accumulated so far, useful for recording simulations or plotting
    them afterwards.

    Example:
        renderer = BufferedRenderer()
        for _ in range(100):
            renderer.render_snapshot(sim.step_frame())

        for frame in renderer.frames:
            print(f"t={frame['time']}, bodies={len(frame['bodies'])}")
    """

    def __init__(self):
        self.frames: list[dict] = []
        self.polylines: dict[int, list[list[float]]] = {}
        self.marks: list[list] = []
        self._current_frame: dict | None = None

    def begin_frame(self, time: float) -> None:
        self._current_frame = {
            "time": time,
            "bodies": [],
        }

    def draw_streamline(self, piece: StreamlineFrame) -> None:
        line = self.polylines.setdefault(piece.tracer, [])
        points = piece.points.tolist()
        # Consecutive pieces share their joining vertex
        if line and points and line[-1] == points[0]:
            points = points[1:]
        line.extend(points)
        self.marks.extend(piece.marks.tolist())

    def draw_body(self, pose: BodyPose) -> None:
        if self._current_frame is None:
            return

        self._current_frame["bodies"].append({
            "id": pose.id,
            "kind": pose.kind,
            "position": pose.position.tolist(),
            "angle": pose.angle,
        })

    def end_frame(self) -> None:
        if self._current_frame is not None:
            self.frames.append(self._current_frame)
            self._current_frame = None

    def clear(self) -> None:
        """Clear all buffered frames and streamlines."""
        self.frames.clear()
        self.polylines.clear()
        self.marks.clear()
