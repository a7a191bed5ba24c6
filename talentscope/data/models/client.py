"""Client data model for TalentScope."""

from .base import BaseDocument


class Client(BaseDocument):
    """A hiring company; referenced by jobs."""

    company_name: str = ""

    class Settings:
        """MongoDB collection settings."""

        name = "clients"
        indexes = ["companyName"]
