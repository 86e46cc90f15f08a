"""talentgate: role-gated employer/talent portal."""

__version__ = "0.1.0"
