"""Exception taxonomy shared by configuration, generation, and dataset building."""


class ConfigError(ValueError):
    """Invalid node count / edge count / builder parameter combination.

    Fatal: indicates a caller mistake and is never retried.
    """


class GenerationOverrun(Exception):
    """Seeding produced more edges than the target edge count.

    Internal to the generator, which recovers by restarting from an empty graph.
    """


class IntegrityViolation(AssertionError):
    """A completed graph breaks a structural invariant (symmetry, diagonal,
    minimum degree, or edge count)."""


class GraphGenerationError(RuntimeError):
    """Raised when graph generation exceeds its restart budget."""


class DatasetBuildError(RuntimeError):
    """Raised when the dataset builder exceeds its candidate budget."""
