from .client import ImportApiClient, SubmissionError

__all__ = ["ImportApiClient", "SubmissionError"]
