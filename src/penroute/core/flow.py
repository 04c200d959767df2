"""Flow-field routing.

Routes start at caller-chosen origins and follow an angle field one fixed
step at a time. A route ends where it leaves the drawing boundaries (the
crossing point is kept), when a passage cell has already been crossed too
often, after a maximum number of steps, or where the route builder finds a
collision with another route.
"""

from collections.abc import Callable, Sequence

from penroute.config import PenrouteSettings
from penroute.core.geometry import clip_to_boundaries, follow_angle, out_of_boundaries
from penroute.core.passage import PassageCounter
from penroute.core.routes import RouteBuilder, StepResult
from penroute.domain import Point, Rect, RouteSet

AngleField = Callable[[Point], float]


class FlowStepper:
    """Step function following an angle field.

    Every emitted point is counted in ``passage``; the counter is owned by
    this stepper for the duration of one drawing pass.
    """

    def __init__(
        self,
        angle_field: AngleField,
        step_length: float,
        boundaries: Rect,
        passage: PassageCounter,
        max_passage: int,
        max_steps: int,
    ) -> None:
        self.angle_field = angle_field
        self.step_length = step_length
        self.boundaries = boundaries
        self.passage = passage
        self.max_passage = max_passage
        self.max_steps = max_steps

    def __call__(self, current: Point, step_index: int, route_index: int) -> StepResult:
        nxt = follow_angle(current, self.angle_field(current), self.step_length)

        # A point on the boundary clips to itself; only a real exit ends the route.
        exit_point = clip_to_boundaries(current, nxt, self.boundaries)
        if exit_point is not None and exit_point != current:
            return exit_point, True
        if out_of_boundaries(nxt, self.boundaries):
            return None

        if self.passage.count(nxt) > self.max_passage:
            return None

        return nxt, step_index >= self.max_steps


def build_flow_routes(
    origins: Sequence[Point],
    angle_field: AngleField,
    boundaries: Rect,
    settings: PenrouteSettings | None = None,
) -> RouteSet:
    """Grow one flow route per origin.

    Step length, passage granularity and limits come from ``settings.flow``;
    routes collide with each other under ``settings.route.discipline``.

    Args:
        origins: Start points, inside ``boundaries``
        angle_field: Direction (radians) to follow at each point
        boundaries: Drawing area; routes are clipped to it
        settings: Application settings (defaults when None)

    Returns:
        Non-degenerate routes in origin order
    """
    settings = settings if settings is not None else PenrouteSettings()
    flow = settings.flow
    passage = PassageCounter(flow.granularity, boundaries.max_x, boundaries.max_y)
    stepper = FlowStepper(
        angle_field=angle_field,
        step_length=flow.step_length,
        boundaries=boundaries,
        passage=passage,
        max_passage=flow.max_passage,
        max_steps=flow.max_steps,
    )
    return RouteBuilder(settings.route.discipline).build(origins, stepper)
