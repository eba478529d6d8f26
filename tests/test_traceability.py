"""Tests for batch traceability timelines."""

from datetime import timedelta

from agrovia.tracking import trace_batch


class TestTraceBatch:
    """Tests for trace_batch."""

    def test_graded_batch_timeline(self, graded_tomato, today):
        """Test a graded batch has all four steps in order."""
        events = trace_batch(graded_tomato, today)

        assert [e.kind for e in events] == ["Harvest", "Quality", "Storage", "Retail"]

        harvest, quality, storage, retail = events
        assert harvest.actor == "Farmer A"
        assert harvest.event_date == today
        assert harvest.details["crop"] == "Tomato"
        assert harvest.details["quantity"] == "50kg"

        assert quality.actor == "Quality Inspection"
        assert quality.details == {"grade": "A", "score": "5/5", "firmness": "High"}

        assert storage.actor == "Central Warehouse"
        assert storage.details["storage"] == "Cold"
        assert storage.details["expiry"] == (today + timedelta(days=12)).isoformat()

        assert retail.event_date == today
        assert retail.details["status"] == "Fresh"
        assert retail.details["remaining_days"] == "12"
        assert retail.details["sale_allowed"] == "Yes"

    def test_ungraded_batch_has_no_quality_step(self, ledger, today):
        """Test the Quality step is skipped before testing."""
        batch = ledger.intake_batch("potato", "F002", 30, today=today)
        assert [e.kind for e in trace_batch(batch, today)] == ["Harvest", "Storage", "Retail"]

    def test_retail_step_uses_query_day(self, graded_tomato, today):
        """Test the Retail step reflects the day of the query."""
        later = today + timedelta(days=13)
        retail = trace_batch(graded_tomato, later)[-1]
        assert retail.event_date == later
        assert retail.details["status"] == "Expired"
        assert retail.details["remaining_days"] == "-1"
        assert retail.details["sale_allowed"] == "No"

    def test_event_str(self, graded_tomato, today):
        """Test event display."""
        text = str(trace_batch(graded_tomato, today)[1])
        assert "Quality by Quality Inspection" in text
        assert "grade=A" in text
