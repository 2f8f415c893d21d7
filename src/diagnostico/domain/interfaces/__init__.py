from .submission import SubmissionGateway, SubmissionError, SubmissionTransportError

__all__ = ["SubmissionGateway", "SubmissionError", "SubmissionTransportError"]
