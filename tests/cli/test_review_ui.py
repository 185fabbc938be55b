"""
Unit tests for the honoka.cli.review_ui module.
"""

from datetime import timedelta
from unittest.mock import MagicMock, patch

import pytest

from honoka.cli.review_ui import start_review_flow
from honoka.db import CardStore
from honoka.models import Card
from honoka.review_session import ReviewSession, ReviewState
from honoka.scheduler import IntervalScheduler, SchedulerOutput


@pytest.fixture
def session(initialized_store: CardStore) -> ReviewSession:
    return ReviewSession(store=initialized_store, scheduler=IntervalScheduler())


def test_start_review_flow_no_due_cards(session: ReviewSession, capsys):
    with patch("rich.console.Console.input") as mock_input:
        assert start_review_flow(session) is None

    assert capsys.readouterr().out == ""
    mock_input.assert_not_called()
    assert session.state is ReviewState.Done


def test_start_review_flow_with_one_card(session: ReviewSession, capsys):
    session.store.insert("What is the capital of France?", "Paris")

    with patch("rich.console.Console.input", side_effect=["", "y"]) as mock_input:
        output = start_review_flow(session)

    out = capsys.readouterr().out
    assert "What is the capital of France?" in out
    assert "Paris" in out
    assert "Next due in 1 day on" in out
    assert mock_input.call_count == 2
    assert output.interval_index == 1
    assert session.store.select_one("What is the capital of France?").interval_index == 1


def test_answer_ack_content_is_ignored(session: ReviewSession):
    session.store.insert("Q", "A")

    with patch("rich.console.Console.input", side_effect=["n", ""]):
        output = start_review_flow(session)

    assert output.interval_index == 1
    assert session.store.select_one("Q").interval_index == 1


def test_failure_reply_resets_interval(session: ReviewSession, t0):
    session.store.insert("Q", "A", now=t0 - timedelta(days=8))
    session.store.update_interval("Q", 3, now=t0 - timedelta(days=8))

    with patch("rich.console.Console.input", side_effect=["", "nope"]):
        output = start_review_flow(session)

    assert output.interval_index == 1


def test_summary_uses_plural_for_longer_intervals(session: ReviewSession, capsys, t0):
    session.store.insert("Q", "A", now=t0 - timedelta(days=8))
    session.store.update_interval("Q", 3, now=t0 - timedelta(days=8))

    with patch("rich.console.Console.input", side_effect=["", "y"]):
        output = start_review_flow(session)

    assert output.interval_index == 4
    assert "Next due in 8 days on" in capsys.readouterr().out


def test_end_of_input_reads_as_empty_line(session: ReviewSession):
    session.store.insert("Q", "A")

    with patch("rich.console.Console.input", side_effect=EOFError):
        output = start_review_flow(session)

    assert output.interval_index == 1


def test_card_text_is_not_interpreted_as_markup(capsys, t0):
    card = Card(front="[red]front[/red]", back="[b]back[/b]", created_at=t0, updated_at=t0)
    session = MagicMock(spec=ReviewSession)
    session.start.return_value = card
    session.card = card
    session.present.return_value = card.front
    session.acknowledge.return_value = card.back
    session.submit.return_value = SchedulerOutput(interval_index=1, next_due=t0 + timedelta(days=1))

    with patch("rich.console.Console.input", side_effect=["", "y"]):
        start_review_flow(session)

    out = capsys.readouterr().out
    assert "[red]front[/red]" in out
    assert "[b]back[/b]" in out
    session.submit.assert_called_once_with("y")
