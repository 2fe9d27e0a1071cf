import os
from pathlib import Path

from pydantic import BaseModel, Field

from fieldretype.errors import ConfigurationError
from fieldretype.models import Locator, RewriteSpec


def default_gofmt_binary() -> str:
    return os.getenv("FIELDRETYPE_GOFMT", "gofmt")


def default_log_level() -> str:
    return os.getenv("FIELDRETYPE_LOG_LEVEL", "WARNING").upper()


class RewriteConfig(BaseModel):
    file: Path | None = None
    locator: Locator = Field(default_factory=Locator)
    spec: RewriteSpec
    write: bool = False
    skip_unexported: bool = False
    gofmt: bool = False
    gofmt_binary: str = Field(default_factory=default_gofmt_binary)

    def validate_options(self) -> None:
        """Reject option combinations before the file is parsed."""
        locator = self.locator
        if self.file is None or not str(self.file):
            raise ConfigurationError("no file is passed")

        if not locator.line and not locator.record and not locator.all:
            raise ConfigurationError("-line, -struct or -all is not passed")

        if locator.line and locator.record:
            raise ConfigurationError("-line or -struct cannot be used together. pick one")

        if locator.field and not locator.record:
            raise ConfigurationError("-field is requiring -struct")
