from projectsync.utils.redact import redact_text

__all__ = ["redact_text"]
