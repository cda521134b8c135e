"""Photo Album Service Package."""

__version__ = "1.0.0"
__description__ = (
    "Photo gallery backend using AWS Lambda, S3, and a relational metadata store"
)

__all__ = ["handlers", "core"]
