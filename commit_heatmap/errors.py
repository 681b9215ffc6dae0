"""
Exceptions raised by commit-heatmap.
"""


class HeatmapError(Exception):
    """Base exception for commit-heatmap errors."""

    pass


class RepositoryError(HeatmapError):
    """The path is not a readable git repository."""

    pass


class InvalidYearError(HeatmapError):
    """The year argument is not a usable calendar year."""

    pass


class RenderError(HeatmapError):
    """The rendered heatmap could not be written out."""

    pass


class ConfigurationError(HeatmapError, ValueError):
    """A HEATMAP_* setting is missing or malformed."""

    pass
