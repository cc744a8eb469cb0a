from __future__ import annotations

from bizflows.flows import (
    NO_OUTPUT_MESSAGE,
    AddEmployeeFlow,
    ClassifyTaskFlow,
    InvoiceQueryFlow,
)
from bizflows.oracle import OracleFailure
from bizflows.router import TaskRouter
from bizflows.types import Classification, Failed, Ok

from conftest import TODAY, ScriptedOracle


def _router(renderer, *script) -> tuple[TaskRouter, ScriptedOracle]:
    oracle = ScriptedOracle(*script)
    router = TaskRouter(
        ClassifyTaskFlow(oracle, renderer, clock=lambda: TODAY),
        AddEmployeeFlow(oracle, renderer, clock=lambda: TODAY),
        InvoiceQueryFlow(oracle, renderer, clock=lambda: TODAY),
    )
    return router, oracle


def test_classify_degrades_failures_to_unknown(renderer) -> None:
    router, _ = _router(renderer, OracleFailure("provider error: Timeout"))
    classification = router.classify("Add Jane")
    assert classification == Classification(
        task_type="unknown", original_query="Add Jane", message=NO_OUTPUT_MESSAGE
    )


def test_dispatch_routes_employee_text(renderer) -> None:
    text = "Add John Smith, john@test.com"
    router, oracle = _router(
        renderer,
        {"task_type": "employee_management", "message": "Query classified."},
        {"success": True, "name": "John Smith", "email": "john@test.com"},
    )
    outcome = router.dispatch(text)

    assert outcome.classification.task_type == "employee_management"
    assert isinstance(outcome.result, Ok)
    assert outcome.result.value.name == "John Smith"
    assert outcome.message == "Employee details extracted."
    templates = [prompt.template for prompt, _ in oracle.calls]
    assert templates == ["classify_task.j2", "add_employee.j2"]
    assert text in oracle.calls[1][0].text


def test_dispatch_routes_invoice_text(renderer) -> None:
    router, oracle = _router(
        renderer,
        {"task_type": "invoice_processing", "message": "Query classified."},
        {"intent": "update_status", "new_status": "Paid"},
    )
    outcome = router.dispatch("Update status to Paid")
    assert isinstance(outcome.result, Ok)
    assert outcome.result.value.intent == "unknown"
    assert outcome.message == outcome.result.value.message
    assert oracle.calls[1][0].template == "invoice_query.j2"


def test_dispatch_surfaces_downstream_failure(renderer) -> None:
    router, _ = _router(
        renderer,
        {"task_type": "employee_management", "message": "Query classified."},
        {"success": False, "message": "Employee name is required."},
    )
    outcome = router.dispatch("Need to add someone.")
    assert outcome.result == Failed("Employee name is required.")
    assert outcome.message == "Employee name is required."


def test_dispatch_unknown_runs_no_downstream_flow(renderer) -> None:
    router, oracle = _router(
        renderer, {"task_type": "unknown", "message": "Try asking about invoices."}
    )
    outcome = router.dispatch("What's the weather like?")
    assert outcome.result is None
    assert outcome.message == "Try asking about invoices."
    assert len(oracle.calls) == 1
