from unittest.mock import patch

from honoka.cli._review_logic import review_next
from honoka.db import CardStore


def test_review_next_wires_store_session_and_flow(tmp_path):
    """Tests the review_next logic by calling it directly."""
    db_path = tmp_path / "test.db"

    with (
        patch("honoka.cli._review_logic.CardStore") as mock_store,
        patch("honoka.cli._review_logic.IntervalScheduler") as mock_scheduler,
        patch("honoka.cli._review_logic.ReviewSession") as mock_session,
        patch("honoka.cli._review_logic.start_review_flow") as mock_start_flow,
    ):
        store_instance = mock_store.return_value.__enter__.return_value

        result = review_next(db_path=db_path)

        mock_store.assert_called_once_with(db_path=db_path)
        mock_session.assert_called_once_with(
            store=store_instance, scheduler=mock_scheduler.return_value
        )
        mock_start_flow.assert_called_once_with(mock_session.return_value)
        mock_store.return_value.__exit__.assert_called_once()
        assert result is mock_start_flow.return_value


def test_review_next_on_fresh_database_creates_schema(tmp_path):
    db_path = tmp_path / "new" / "data.db"

    assert review_next(db_path=db_path) is None

    with CardStore(db_path) as store:
        assert list(store.select_all()) == []
