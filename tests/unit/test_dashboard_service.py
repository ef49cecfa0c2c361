from labsheet.application.services.analysis_service import AnalysisService
from labsheet.application.services.dashboard_service import DashboardService
from labsheet.application.services.record_store import RecordStore
from labsheet.infrastructure.workbook.memory import InMemoryWorkbook


def test_summary_counts_and_totals(workbook: InMemoryWorkbook) -> None:
    store = RecordStore(workbook)
    AnalysisService(store).request_analysis(
        client_id="cli1",
        technician_id="tec1",
        test_names=["Fat"],
        sample_name="Cream",
    )

    summary = DashboardService(store).summary()

    assert summary.total_clients == 2
    assert summary.total_analyses == 2
    assert summary.total_revenue == 105.5
    assert summary.analyses_per_client == {"Acme Dairy": 2}
    assert summary.cost_per_technician == {"Ana Lab": 105.5}
    assert summary.status_counts == {"In Progress": 1, "Received": 1}


def test_summary_of_an_empty_workbook() -> None:
    summary = DashboardService(RecordStore(InMemoryWorkbook())).summary()

    assert summary.total_clients == 0
    assert summary.total_revenue == 0
    assert summary.analyses_per_client == {}
