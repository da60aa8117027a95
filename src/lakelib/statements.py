"""Session setup commands rendered as literal SQL

DuckDB does not accept placeholders inside ATTACH or CREATE SECRET, so these
commands are built from validated tokens and quoted literals. Every command
renders through ``render_options``, ``quote_identifier`` and ``quote``.
"""

from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any, Iterator, Optional, Union

from lakelib.utils.quoting import option_name, quote, quote_identifier


def render_options(options: Any) -> str:
    """Render ``KEY value`` pairs joined by commas"""
    return ", ".join(
        f"{option_name(key)} {quote(value)}" for key, value in options.items()
    )


@dataclass(frozen=True)
class AttachOptions:
    """Options for attaching the DuckLake catalog

    Only present options are rendered; the engine picks its defaults from
    absent ones. Field order is rendering order.
    """
    data_path: str
    create_if_not_exists: bool = False
    snapshot_version: Optional[int] = None
    snapshot_time: Optional[Union[datetime, str]] = None
    data_inlining_row_limit: int = 0
    override_data_path: bool = False

    def items(self) -> Iterator[tuple[str, Any]]:
        """Yield the (name, value) pairs to render"""
        yield "data_path", self.data_path
        if not self.create_if_not_exists:
            yield "create_if_not_exists", False
        if self.snapshot_version is not None:
            yield "snapshot_version", self.snapshot_version
        if self.snapshot_time is not None:
            yield "snapshot_time", self.snapshot_time
        if self.data_inlining_row_limit > 0:
            yield "data_inlining_row_limit", self.data_inlining_row_limit
        if self.override_data_path:
            yield "override_data_path", True


@dataclass(frozen=True)
class DataSourceOptions:
    """Options for a secondary attach; always read-only"""
    type: str
    read_only: bool = True

    def items(self) -> Iterator[tuple[str, Any]]:
        for f in fields(self):
            yield f.name, getattr(self, f.name)


@dataclass(frozen=True)
class SecretOptions:
    """Options for CREATE SECRET"""
    type: str
    provider: str = "credential_chain"

    def items(self) -> Iterator[tuple[str, Any]]:
        for f in fields(self):
            yield f.name, getattr(self, f.name)


@dataclass(frozen=True)
class Install:
    extension: str

    def sql(self) -> str:
        return f"INSTALL {quote_identifier(self.extension)}"


@dataclass(frozen=True)
class CreateSecret:
    options: SecretOptions

    def sql(self) -> str:
        return f"CREATE SECRET ({render_options(self.options)})"


@dataclass(frozen=True)
class Attach:
    """ATTACH 'url' AS "alias" (OPTION value, ...)"""
    alias: str
    url: str
    options: Optional[Union[AttachOptions, DataSourceOptions]] = None

    def sql(self) -> str:
        sql = f"ATTACH {quote(self.url)} AS {quote_identifier(self.alias)}"
        if self.options is not None:
            rendered = render_options(self.options)
            if rendered:
                sql += f" ({rendered})"
        return sql


@dataclass(frozen=True)
class Detach:
    alias: str

    def sql(self) -> str:
        return f"DETACH {quote_identifier(self.alias)}"


@dataclass(frozen=True)
class Use:
    alias: str

    def sql(self) -> str:
        return f"USE {quote_identifier(self.alias)}"


@dataclass(frozen=True)
class DropTable:
    table: str
    if_exists: bool = False

    def sql(self) -> str:
        clause = "IF EXISTS " if self.if_exists else ""
        return f"DROP TABLE {clause}{quote_identifier(self.table)}"


@dataclass(frozen=True)
class Checkpoint:
    def sql(self) -> str:
        return "CHECKPOINT"


Command = Union[Install, CreateSecret, Attach, Detach, Use, DropTable, Checkpoint]
