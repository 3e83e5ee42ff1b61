from dataclasses import dataclass

DEFAULT_ENDPOINT = "https://api.dbpedia-spotlight.org/en/annotate"


@dataclass
class Config:
    """Per-request annotation settings."""

    confidence: float = 0.5  # Minimum disambiguation confidence, 0.0–1.0
    support: int = 20  # Minimum number of inlinks of a resource
    endpoint: str = DEFAULT_ENDPOINT
    dry_run: bool = False

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"confidence must be between 0 and 1, got {self.confidence}")
        if self.support < 0:
            raise ValueError(f"support must be non-negative, got {self.support}")
        if not self.endpoint:
            raise ValueError("endpoint must not be empty")
