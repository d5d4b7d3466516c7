"""
Integration tests for MCP tools over an in-memory store.
"""

import csv
import io
from datetime import datetime

import pytest
from freezegun import freeze_time

from finance_tracker_mcp.core.exceptions import RecordNotFoundError
from finance_tracker_mcp.models.budget import NewBudget
from finance_tracker_mcp.models.category import NewCategory
from finance_tracker_mcp.models.schemas import BudgetUpdate, TransactionQuery, TransactionUpdate
from finance_tracker_mcp.models.transaction import NewTransaction
from finance_tracker_mcp.tools.tools import CSV_HEADER, create_tool_schemas

FROZEN_NOW = "2026-10-15 12:00:00"


@pytest.fixture
def populated(tools, food, salary, add_transaction, add_budget):
    """Tools over a store with a few months of activity."""
    add_transaction(3000, "2026-10-01", "income", salary.id, "October salary")
    add_transaction(45.5, "2026-10-03", "expense", food.id, "Groceries")
    add_transaction(120, "2026-10-12", "expense", "ghost", "Concert")
    add_transaction(3000, "2026-09-01", "income", salary.id, "September salary")
    add_transaction(80, "2026-09-14", "expense", food.id, "Dinner")
    add_budget(food.id, 200)
    return tools


@pytest.mark.integration
def test_get_categories(tools, food, salary):
    """Test get_categories tool."""
    result = tools.get_categories()

    assert result["count"] == 2
    assert result["count"] == len(result["categories"])
    cat = result["categories"][0]
    assert set(cat) == {"id", "name", "color", "icon", "type"}


@pytest.mark.integration
def test_get_categories_with_type_filter(tools, food, salary):
    result = tools.get_categories(type="income")

    assert result["count"] == 1
    assert result["categories"][0]["name"] == "Salary"


@pytest.mark.integration
def test_get_and_create_category(tools):
    created = tools.create_category(
        NewCategory(name="Pets", color="#a855f7", icon="fas fa-paw")
    )

    assert tools.get_category(created["id"]) == created
    with pytest.raises(RecordNotFoundError):
        tools.get_category("missing")


@pytest.mark.integration
def test_get_transactions_basic(populated):
    """Test basic get_transactions tool."""
    result = populated.get_transactions()

    assert result["count"] == 5
    assert result["count"] == len(result["transactions"])

    # Newest first
    dates = [txn["date"] for txn in result["transactions"]]
    assert dates == sorted(dates, reverse=True)

    txn = result["transactions"][0]
    assert {"id", "description", "amount", "category_id", "date", "type"} <= set(txn)
    assert txn["category_name"] == "Unknown"


@pytest.mark.integration
def test_get_transactions_with_filters(populated, food):
    """Test get_transactions with multiple filters."""
    result = populated.get_transactions(
        TransactionQuery(
            category_id=food.id,
            start_date="2026-10-01",
            end_date="2026-10-31",
            min_amount=5.0,
        )
    )

    assert result["count"] == 1
    txn = result["transactions"][0]
    assert txn["description"] == "Groceries"
    assert txn["category_name"] == "Food & Dining"


@pytest.mark.integration
def test_get_transactions_with_limit(populated):
    result = populated.get_transactions(TransactionQuery(limit=2))
    assert result["count"] == 2


@pytest.mark.integration
def test_get_transactions_returns_every_record_without_limit(tools, food, add_transaction):
    for day in range(150):
        add_transaction(10, f"2026-{day // 28 + 1:02d}-{day % 28 + 1:02d}", category_id=food.id)

    result = tools.get_transactions()

    assert result["count"] == 150
    assert len(result["transactions"]) == 150


@pytest.mark.integration
@freeze_time(FROZEN_NOW)
def test_get_transactions_with_period(populated):
    """Test get_transactions with period parameter."""
    result = populated.get_transactions(TransactionQuery(period="last-month"))

    assert [txn["description"] for txn in result["transactions"]] == [
        "Dinner",
        "September salary",
    ]


@pytest.mark.integration
def test_transaction_lifecycle(tools, food):
    created = tools.create_transaction(
        NewTransaction(
            description="Coffee",
            amount=3.5,
            category_id=food.id,
            date="2026-10-02T08:15:00",
            type="expense",
        )
    )
    txn_id = created["id"]
    assert created["date"] == "2026-10-02T08:15:00"
    assert created["signed_amount"] == -3.5
    assert tools.get_transaction(txn_id) == created

    updated = tools.update_transaction(txn_id, TransactionUpdate(amount=4.25))
    assert updated["amount"] == 4.25
    assert updated["description"] == "Coffee"

    assert tools.delete_transaction(txn_id) == {"transaction_id": txn_id, "deleted": True}
    assert tools.delete_transaction(txn_id) == {"transaction_id": txn_id, "deleted": False}
    with pytest.raises(RecordNotFoundError, match="Transaction not found"):
        tools.get_transaction(txn_id)


@pytest.mark.integration
def test_update_missing_transaction(tools):
    with pytest.raises(RecordNotFoundError) as exc_info:
        tools.update_transaction("missing", TransactionUpdate(amount=1))

    assert exc_info.value.kind == "Transaction"
    assert exc_info.value.record_id == "missing"


@pytest.mark.integration
def test_budget_lifecycle(tools, food):
    created = tools.create_budget(
        NewBudget(category_id=food.id, amount=300, month=10, year=2026)
    )
    budget_id = created["id"]
    assert created["category_name"] == "Food & Dining"

    assert tools.get_budgets()["count"] == 1
    assert tools.get_budget(budget_id) == created

    updated = tools.update_budget(budget_id, BudgetUpdate(amount=350))
    assert updated["amount"] == 350
    assert updated["month"] == 10

    assert tools.delete_budget(budget_id)["deleted"] is True
    assert tools.get_budgets() == {"count": 0, "budgets": []}
    with pytest.raises(RecordNotFoundError):
        tools.get_budget(budget_id)


@pytest.mark.integration
@freeze_time(FROZEN_NOW)
def test_get_monthly_expenses(populated):
    result = populated.get_monthly_expenses(months=3)

    assert result["months"] == 3
    assert [point["amount"] for point in result["data"]] == [0, 80, 165.5]
    assert result["data"][-1] == {"month": "Oct", "period": "2026-10", "amount": 165.5}


@pytest.mark.integration
def test_get_category_expenses(populated, food):
    result = populated.get_category_expenses(
        start_date=datetime(2026, 10, 1), end_date=datetime(2026, 10, 31, 23, 59)
    )

    assert result["period"] == {
        "start_date": "2026-10-01T00:00:00",
        "end_date": "2026-10-31T23:59:00",
    }
    assert result["total_spending"] == 165.5
    assert result["category_count"] == 2

    by_name = {entry["category"]: entry for entry in result["categories"]}
    assert by_name["Food & Dining"]["amount"] == 45.5
    assert by_name["Unknown"]["color"] == "#64748b"


@pytest.mark.integration
@freeze_time(FROZEN_NOW)
def test_get_summary(populated):
    """Test get_summary tool."""
    result = populated.get_summary()

    assert result["total_balance"] == pytest.approx(6000 - 245.5)
    assert result["monthly_income"] == 3000
    assert result["monthly_expenses"] == 165.5
    assert result["savings_rate"] == pytest.approx((3000 - 165.5) / 3000 * 100)


@pytest.mark.integration
@freeze_time(FROZEN_NOW)
def test_get_spending_trends(populated):
    result = populated.get_spending_trends(months=2)

    assert result["months"] == 2
    september, october = result["data"]
    assert september["savings"] == 2920
    assert october["income"] == 3000


@pytest.mark.integration
@freeze_time(FROZEN_NOW)
def test_get_spending_forecast(populated):
    result = populated.get_spending_forecast()

    assert result["months"] == 3
    assert [point["period"] for point in result["data"]] == ["2026-11", "2026-12", "2027-01"]
    for point in result["data"]:
        assert point["predicted"] >= 0
        assert 0.5 <= point["confidence"] <= 1


@pytest.mark.integration
@freeze_time(FROZEN_NOW)
def test_get_budget_performance(populated, food):
    result = populated.get_budget_performance()

    assert result["count"] == 1
    entry = result["budgets"][0]
    assert entry["category_id"] == food.id
    assert entry["category_name"] == "Food & Dining"
    assert entry["actual_amount"] == 45.5
    assert entry["variance"] == 154.5
    assert entry["percentage_used"] == pytest.approx(22.75)


@pytest.mark.integration
def test_export_transactions_json(populated):
    result = populated.export_transactions()

    assert result["format"] == "json"
    assert result["count"] == 5
    assert result["content"][0]["description"] == "Concert"


@pytest.mark.integration
def test_export_transactions_csv(populated):
    result = populated.export_transactions(
        format="csv", start_date=datetime(2026, 10, 1)
    )

    assert result["format"] == "csv"
    assert result["count"] == 3

    rows = list(csv.reader(io.StringIO(result["content"])))
    assert rows[0] == CSV_HEADER
    assert rows[1] == ["2026-10-12", "Concert", "120.00", "expense", "Unknown"]
    assert rows[3] == ["2026-10-01", "October salary", "3000.00", "income", "Salary"]


@pytest.mark.integration
def test_export_csv_quotes_commas(tools, food, add_transaction):
    add_transaction(9.99, "2026-10-01", "expense", food.id, "Bread, milk")

    content = tools.export_transactions(format="csv")["content"]

    assert '"Bread, milk"' in content
    assert content.endswith("\n")


@pytest.mark.integration
def test_create_tool_schemas():
    """Test that tool schemas are created correctly."""
    schemas = create_tool_schemas()

    assert len(schemas) == 20
    names = {schema["name"] for schema in schemas}
    assert {
        "get_transactions",
        "create_transaction",
        "get_monthly_expenses",
        "get_budget_performance",
        "export_transactions",
    } <= names

    for schema in schemas:
        assert "description" in schema
        assert schema["inputSchema"]["type"] == "object"

    create_txn = next(s for s in schemas if s["name"] == "create_transaction")
    assert set(create_txn["inputSchema"]["required"]) == {
        "description",
        "amount",
        "category_id",
        "date",
        "type",
    }
