from __future__ import annotations

import pytest

from labsheet.infrastructure.workbook.memory import InMemoryWorkbook

ANALYSIS_HEADERS = [
    "id",
    "folio",
    "receptionDate",
    "deliveryDate",
    "sampleName",
    "product",
    "subtype",
    "clientId",
    "technicianId",
    "priority",
    "status",
    "cost",
    "requestedTests",
    "Protein",
    "Fat",
    "Lot",
]


@pytest.fixture
def workbook() -> InMemoryWorkbook:
    return InMemoryWorkbook(
        {
            "Clients": [
                ["id", "name", "contactPerson", "email", "phone"],
                ["cli1", "Acme Dairy", "Jane Roe", "jane@acme.test", "555-0100"],
                ["cli2", "Beta Foods", "Tom Poe", "tom@beta.test", "555-0200"],
            ],
            "Technicians": [
                ["id", "name", "specialty", "hireDate"],
                ["tec1", "Ana Lab", "Chemistry", "2021-03-15"],
            ],
            "AnalysisTypes": [
                ["id", "testName", "units", "resultType"],
                ["at1", "Protein", "g/100g", "numeric"],
                ["at2", "Fat", "g/100g", "numeric"],
                ["at3", "Lot", "", "text"],
            ],
            "AnalysisCosts": [
                ["id", "testName", "cost", "method"],
                ["c1", "Protein", "45.5", "Kjeldahl"],
                ["c2", "Fat", "30", "Soxhlet"],
            ],
            "AnalysisResults": [
                ANALYSIS_HEADERS,
                [
                    "an1",
                    "2024060001",
                    "2024-06-01",
                    "",
                    "Milk batch 7",
                    "Dairy",
                    "UHT",
                    "cli1",
                    "tec1",
                    "Normal",
                    "In Progress",
                    "75.5",
                    "Protein, Fat",
                    "12.5",
                    "",
                    "007",
                ],
            ],
        }
    )
