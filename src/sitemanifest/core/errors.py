"""Error taxonomy for ingestion, parsing, and normalization failures"""


class ManifestError(Exception):
    """Base error; every failure carries the source path it refers to."""

    def __init__(self, message: str, path: str = None):
        self.message = message
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)

    @property
    def kind(self) -> str:
        return type(self).__name__


class DocumentError(ManifestError):
    """A single document failed to parse or normalize."""


class MalformedFrontMatter(DocumentError):
    """Delimiters missing or the block is not parseable key-value data."""


class MissingRequiredField(DocumentError):
    """A required front matter field (title) is absent or empty."""


class UnresolvableIdentity(DocumentError):
    """The source path yields an empty identity key."""


class IngestionError(ManifestError):
    """Reading the content source failed."""


class IOTransient(IngestionError):
    """A transient read error persisted through every retry attempt."""


class SourceUnreadable(IngestionError):
    """A source file cannot be read or decoded; retrying would not help."""


class IngestionAborted(IngestionError):
    """Ingestion was cancelled or timed out before every file was read."""
