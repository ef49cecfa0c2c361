from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from labsheet.infrastructure.sheets.coercion import FieldKind

RESULTS_FIELD = "results"


class EntityKind(str, Enum):
    CLIENT = "client"
    TECHNICIAN = "technician"
    ANALYSIS_TYPE = "analysisType"
    ANALYSIS_COST = "analysisCost"
    ANALYSIS = "analysis"

    @classmethod
    def parse(cls, raw: str) -> EntityKind:
        text = raw.strip().lower()
        for kind in cls:
            if text in {kind.value.lower(), kind.name.lower()}:
                return kind
        raise ValueError(f"Unknown entity kind: {raw}")


@dataclass(frozen=True, slots=True)
class FieldAliasTable:
    """Lower-cased header spelling -> camel-cased field name.

    Headers missing from the table map to their lower-cased spelling.
    """

    aliases: Mapping[str, str]

    def field_for(self, header_key: str) -> str:
        key = header_key.strip().lower()
        return self.aliases.get(key, key)


DEFAULT_FIELD_ALIASES = FieldAliasTable(
    aliases=MappingProxyType(
        {
            "contactperson": "contactPerson",
            "hiredate": "hireDate",
            "testname": "testName",
            "resulttype": "resultType",
            "receptiondate": "receptionDate",
            "deliverydate": "deliveryDate",
            "samplename": "sampleName",
            "clientid": "clientId",
            "technicianid": "technicianId",
            "requestedtests": "requestedTests",
        }
    )
)


@dataclass(frozen=True, slots=True)
class FieldSpec:
    name: str
    kind: FieldKind = FieldKind.TEXT

    @property
    def key(self) -> str:
        return self.name.lower()


@dataclass(frozen=True, slots=True)
class EntitySchema:
    """Mapping configuration for one entity kind and its sheet.

    ``fields`` lists the fixed columns in default header order. For an
    open-schema entity every other header is a dynamic test-result column.
    """

    kind: EntityKind
    sheet_name: str
    fields: tuple[FieldSpec, ...]
    aliases: FieldAliasTable = DEFAULT_FIELD_ALIASES
    open_schema: bool = False
    id_field: str = "id"
    _kinds: Mapping[str, FieldKind] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "_kinds",
            MappingProxyType({spec.key: spec.kind for spec in self.fields}),
        )

    @property
    def default_headers(self) -> list[str]:
        return [spec.name for spec in self.fields]

    def is_fixed(self, header_key: str) -> bool:
        return header_key.strip().lower() in self._kinds

    def field_name(self, header_key: str) -> str:
        return self.aliases.field_for(header_key)

    def field_kind(self, header_key: str) -> FieldKind:
        return self._kinds.get(header_key.strip().lower(), FieldKind.TEXT)


CLIENT_SCHEMA = EntitySchema(
    kind=EntityKind.CLIENT,
    sheet_name="Clients",
    fields=(
        FieldSpec("id"),
        FieldSpec("name"),
        FieldSpec("contactPerson"),
        FieldSpec("email"),
        FieldSpec("phone"),
    ),
)

TECHNICIAN_SCHEMA = EntitySchema(
    kind=EntityKind.TECHNICIAN,
    sheet_name="Technicians",
    fields=(
        FieldSpec("id"),
        FieldSpec("name"),
        FieldSpec("specialty"),
        FieldSpec("hireDate"),
    ),
)

ANALYSIS_TYPE_SCHEMA = EntitySchema(
    kind=EntityKind.ANALYSIS_TYPE,
    sheet_name="AnalysisTypes",
    fields=(
        FieldSpec("id"),
        FieldSpec("testName"),
        FieldSpec("units"),
        FieldSpec("resultType"),
    ),
)

ANALYSIS_COST_SCHEMA = EntitySchema(
    kind=EntityKind.ANALYSIS_COST,
    sheet_name="AnalysisCosts",
    fields=(
        FieldSpec("id"),
        FieldSpec("testName"),
        FieldSpec("cost", FieldKind.NUMERIC),
        FieldSpec("method"),
    ),
)

ANALYSIS_SCHEMA = EntitySchema(
    kind=EntityKind.ANALYSIS,
    sheet_name="AnalysisResults",
    fields=(
        FieldSpec("id"),
        FieldSpec("folio"),
        FieldSpec("receptionDate"),
        FieldSpec("deliveryDate"),
        FieldSpec("sampleName"),
        FieldSpec("product"),
        FieldSpec("subtype"),
        FieldSpec("clientId"),
        FieldSpec("technicianId"),
        FieldSpec("priority"),
        FieldSpec("status"),
        FieldSpec("cost", FieldKind.NUMERIC),
        FieldSpec("requestedTests", FieldKind.LIST),
    ),
    open_schema=True,
)

DEFAULT_SCHEMAS: Mapping[EntityKind, EntitySchema] = MappingProxyType(
    {
        schema.kind: schema
        for schema in (
            CLIENT_SCHEMA,
            TECHNICIAN_SCHEMA,
            ANALYSIS_TYPE_SCHEMA,
            ANALYSIS_COST_SCHEMA,
            ANALYSIS_SCHEMA,
        )
    }
)
