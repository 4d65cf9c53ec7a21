import dataclasses
import logging

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class Diagnostic:
    """A message produced while converting a single field or feature.

    Attributes:
        level: ``logging`` level number, e.g. ``logging.WARNING``.
        field: Source field the message is about, empty for document-wide notes.
        message: Human readable message.
    """

    level: int
    field: str
    message: str

    @classmethod
    def warning(cls, field: str, message: str) -> "Diagnostic":
        return cls(logging.WARNING, field, message)

    @classmethod
    def info(cls, field: str, message: str) -> "Diagnostic":
        return cls(logging.INFO, field, message)

    def log(self, target: logging.Logger = logger) -> None:
        target.log(self.level, self.message)


@dataclasses.dataclass(frozen=True)
class TransformResult:
    """Outcome of one transform or pass: target writes and diagnostics."""

    writes: dict[str, str] = dataclasses.field(default_factory=dict)
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def ok(self) -> bool:
        """False when any diagnostic is a warning or worse."""
        return all(d.level < logging.WARNING for d in self.diagnostics)

    @classmethod
    def failure(cls, field: str, message: str) -> "TransformResult":
        return cls(diagnostics=(Diagnostic.warning(field, message),))
