"""Rendering capability fixed at start-up."""

from ...ports.rendering import RenderingCapability


class StaticCapability(RenderingCapability):
    """Capability flags taken from configuration.

    ``rich`` enables full documents. ``basic`` enables the minimal PDF used
    by the degraded path; without it the degraded path returns JSON.
    """

    def __init__(self, rich: bool = True, basic: bool = False) -> None:
        self.rich = rich
        self.basic = basic

    def supports_rich_rendering(self) -> bool:
        return self.rich

    def supports_basic_rendering(self) -> bool:
        return self.basic
