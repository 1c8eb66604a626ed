"""Tests for the user search presenter."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from findpeople.exceptions import ApiConnectionError, DirectoryError
from findpeople.ui.search.search_presenter import (
    DisplayMode,
    Notification,
    SearchPresenter,
    SearchStateVM,
)

from conftest import ALAN, ALICE, JANE, JDOE


@pytest.fixture
def mock_directory():
    directory = MagicMock()
    directory.search_users = AsyncMock(return_value=[])
    directory.send_connection_request = AsyncMock(return_value=None)
    return directory


@pytest.fixture
def presenter(mock_directory):
    presenter = SearchPresenter(
        mock_directory,
        on_state_update=AsyncMock(),
        on_notify=AsyncMock(),
    )
    presenter.mount()
    return presenter


class TestSearchStateVM:
    """Display mode derivation."""

    def test_default_is_initial(self):
        state = SearchStateVM()
        assert state.display_mode is DisplayMode.INITIAL
        assert not state.is_failure

    def test_loading_overrides_everything(self):
        state = SearchStateVM(is_loading=True, results=(ALICE,), error_message="boom")
        assert state.display_mode is DisplayMode.LOADING

    def test_error_overrides_results(self):
        state = SearchStateVM(results=(ALICE,), error_message="boom")
        assert state.display_mode is DisplayMode.ERROR
        assert state.is_failure

    def test_results(self):
        assert SearchStateVM(results=(ALICE,)).display_mode is DisplayMode.RESULTS

    def test_no_matches_is_not_failure(self):
        state = SearchStateVM(error_message='No users found matching "x"', no_matches=True)
        assert state.display_mode is DisplayMode.ERROR
        assert not state.is_failure


class TestQueryEditing:
    """set_query and clear."""

    def test_set_query_records_text_without_searching(self, presenter, mock_directory):
        state = presenter.set_query("al")
        assert state.query == "al"
        assert presenter.state.query == "al"
        mock_directory.search_users.assert_not_called()

    def test_set_query_keeps_whitespace(self, presenter):
        assert presenter.set_query("  al ").query == "  al "

    def test_set_query_empty_clears(self, presenter):
        presenter._commit(query="al", results=(ALICE,))
        state = presenter.set_query("")
        assert state == SearchStateVM()
        assert state.display_mode is DisplayMode.INITIAL

    @pytest.mark.parametrize(
        "state",
        [
            SearchStateVM(query="al", results=(ALICE, ALAN)),
            SearchStateVM(query="x", error_message="Error searching for users: down"),
            SearchStateVM(query="zzz", error_message="none", no_matches=True),
            SearchStateVM(query="al", is_loading=True),
        ],
    )
    def test_clear_from_any_mode_gives_initial(self, presenter, state):
        presenter._state = state
        cleared = presenter.clear()
        assert cleared.query == ""
        assert cleared.results == ()
        assert cleared.error_message == ""
        assert cleared.display_mode is DisplayMode.INITIAL


class TestSearch:
    """search() lifecycle."""

    @pytest.mark.asyncio
    async def test_empty_query_does_not_call_directory(self, presenter, mock_directory):
        await presenter.search()
        mock_directory.search_users.assert_not_called()
        assert presenter.state.display_mode is DisplayMode.INITIAL

    @pytest.mark.asyncio
    async def test_whitespace_query_does_not_call_directory(self, presenter, mock_directory):
        presenter._state = SearchStateVM(query="   ", results=(ALICE,), error_message="old")
        await presenter.search()
        mock_directory.search_users.assert_not_called()
        assert presenter.state.results == ()
        assert presenter.state.error_message == ""
        assert presenter.state.display_mode is DisplayMode.INITIAL
        presenter.on_state_update.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_query_is_trimmed(self, presenter, mock_directory):
        mock_directory.search_users.return_value = [ALICE]
        presenter.set_query("  alice  ")
        await presenter.search()
        mock_directory.search_users.assert_awaited_once_with("alice")

    @pytest.mark.asyncio
    async def test_loading_is_published_first(self, presenter, mock_directory):
        mock_directory.search_users.return_value = [ALICE]
        presenter.set_query("al")
        await presenter.search()

        published = [call.args[0] for call in presenter.on_state_update.await_args_list]
        assert published[0].display_mode is DisplayMode.LOADING
        assert published[-1].display_mode is DisplayMode.RESULTS

    @pytest.mark.asyncio
    async def test_results_keep_directory_order(self, presenter, mock_directory):
        mock_directory.search_users.return_value = [JANE, ALICE, ALAN]
        presenter.set_query("a")
        await presenter.search()

        assert presenter.state.results == (JANE, ALICE, ALAN)
        assert presenter.state.display_mode is DisplayMode.RESULTS
        assert not presenter.state.is_loading

    @pytest.mark.asyncio
    async def test_no_matches_message(self, presenter, mock_directory):
        presenter.set_query("zzz")
        await presenter.search()

        state = presenter.state
        assert state.results == ()
        assert state.error_message == 'No users found matching "zzz"'
        assert state.no_matches
        assert not state.is_failure
        assert state.display_mode is DisplayMode.ERROR

    @pytest.mark.asyncio
    async def test_failure_message(self, presenter, mock_directory):
        mock_directory.search_users.side_effect = ApiConnectionError("timed out")
        presenter.set_query("al")
        await presenter.search()

        state = presenter.state
        assert not state.is_loading
        assert state.error_message.startswith("Error searching for users: timed out")
        assert state.is_failure
        assert state.display_mode is DisplayMode.ERROR

    @pytest.mark.asyncio
    async def test_new_search_clears_previous_error(self, presenter, mock_directory):
        mock_directory.search_users.side_effect = [RuntimeError("down"), [ALICE]]
        presenter.set_query("al")
        await presenter.search()
        assert presenter.state.is_failure

        await presenter.search()
        assert presenter.state.error_message == ""
        assert presenter.state.results == (ALICE,)

    @pytest.mark.asyncio
    async def test_search_al_returns_both_matches(self, directory):
        updates = []

        async def record(state):
            updates.append(state)

        presenter = SearchPresenter(directory, on_state_update=record)
        presenter.mount()
        presenter.set_query("al")
        await presenter.search()

        assert presenter.state.results == (ALICE, ALAN)
        assert updates[0].is_loading
        assert updates[-1].display_mode is DisplayMode.RESULTS

    @pytest.mark.asyncio
    async def test_works_without_callbacks(self, mock_directory):
        mock_directory.search_users.return_value = [ALICE]
        presenter = SearchPresenter(mock_directory)
        presenter.mount()
        presenter.set_query("al")
        await presenter.search()
        assert presenter.state.results == (ALICE,)


class TestOverlappingSearches:
    """Completions of overlapping searches are applied in arrival order."""

    @pytest.mark.asyncio
    async def test_last_completion_wins(self, gated_directory_factory):
        directory = gated_directory_factory({"al": [ALICE, ALAN], "jane": [JANE]})
        presenter = SearchPresenter(directory)
        presenter.mount()

        presenter.set_query("al")
        first = asyncio.create_task(presenter.search())
        await asyncio.sleep(0)
        presenter.set_query("jane")
        second = asyncio.create_task(presenter.search())
        await asyncio.sleep(0)
        assert directory.search_calls == ["al", "jane"]

        directory.release("jane")
        await second
        assert presenter.state.results == (JANE,)

        directory.release("al")
        await first
        assert presenter.state.results == (ALICE, ALAN)
        assert presenter.state.query == "jane"
        assert presenter.state.display_mode is DisplayMode.RESULTS

    @pytest.mark.asyncio
    async def test_late_failure_overrides_earlier_results(self, gated_directory_factory):
        directory = gated_directory_factory({"al": RuntimeError("boom"), "jane": [JANE]})
        presenter = SearchPresenter(directory)
        presenter.mount()

        presenter.set_query("al")
        first = asyncio.create_task(presenter.search())
        await asyncio.sleep(0)
        presenter.set_query("jane")
        second = asyncio.create_task(presenter.search())
        await asyncio.sleep(0)

        directory.release("jane")
        await second
        directory.release("al")
        await first

        assert presenter.state.display_mode is DisplayMode.ERROR
        assert presenter.state.error_message == "Error searching for users: boom"


class TestUnmount:
    """Work that completes after unmount is discarded."""

    @pytest.mark.asyncio
    async def test_search_completion_after_unmount_is_dropped(self, gated_directory_factory):
        directory = gated_directory_factory({"al": [ALICE]})
        on_state_update = AsyncMock()
        presenter = SearchPresenter(directory, on_state_update=on_state_update)
        presenter.mount()

        presenter.set_query("al")
        task = asyncio.create_task(presenter.search())
        await asyncio.sleep(0)
        assert presenter.state.is_loading
        assert on_state_update.await_count == 1

        presenter.unmount()
        directory.release("al")
        await task

        assert on_state_update.await_count == 1
        assert presenter.state.results == ()
        assert not presenter.is_mounted

    @pytest.mark.asyncio
    async def test_search_failure_after_unmount_is_dropped(self, gated_directory_factory):
        directory = gated_directory_factory({"al": RuntimeError("boom")})
        presenter = SearchPresenter(directory, on_state_update=AsyncMock())
        presenter.mount()

        presenter.set_query("al")
        task = asyncio.create_task(presenter.search())
        await asyncio.sleep(0)
        presenter.unmount()
        directory.release("al")
        await task

        assert presenter.state.error_message == ""

    @pytest.mark.asyncio
    async def test_connection_result_after_unmount_is_dropped(self, gated_directory_factory):
        directory = gated_directory_factory({})
        directory.request_gate.clear()
        on_notify = AsyncMock()
        presenter = SearchPresenter(directory, on_notify=on_notify)
        presenter.mount()

        task = asyncio.create_task(presenter.send_connection_request(JANE))
        await asyncio.sleep(0)
        presenter.unmount()
        directory.request_gate.set()
        await task

        assert directory.request_calls == [JANE.id]
        on_notify.assert_not_awaited()

    def test_unmount_bumps_generation(self, presenter):
        generation = presenter.generation
        presenter.unmount()
        assert presenter.generation == generation + 1

    def test_remount_starts_fresh(self, presenter):
        presenter._commit(query="al", results=(ALICE,))
        presenter.unmount()
        presenter.mount()
        assert presenter.state == SearchStateVM()
        assert presenter.is_mounted


class TestConnectionRequest:
    """send_connection_request notifications."""

    @pytest.mark.asyncio
    async def test_success_uses_display_name(self, presenter, mock_directory):
        await presenter.send_connection_request(JANE)

        mock_directory.send_connection_request.assert_awaited_once_with(JANE.id)
        presenter.on_notify.assert_awaited_once_with(
            Notification("Connection request sent to Jane Doe")
        )

    @pytest.mark.asyncio
    async def test_success_falls_back_to_username(self, presenter):
        await presenter.send_connection_request(JDOE)

        notification = presenter.on_notify.await_args.args[0]
        assert notification.message == "Connection request sent to jdoe"
        assert notification.severity == "information"
        assert notification.timeout == 2

    @pytest.mark.asyncio
    async def test_failure_notifies_error(self, presenter, mock_directory):
        mock_directory.send_connection_request.side_effect = DirectoryError("nope")

        await presenter.send_connection_request(JANE)

        notification = presenter.on_notify.await_args.args[0]
        assert notification.message == "Error sending connection request: nope"
        assert notification.severity == "error"

    @pytest.mark.asyncio
    async def test_does_not_touch_search_state(self, presenter):
        presenter._commit(query="ja", results=(JANE,))
        before = presenter.state

        await presenter.send_connection_request(JANE)

        assert presenter.state is before
        presenter.on_state_update.assert_not_awaited()


class TestResultAt:
    def test_in_range(self, presenter):
        presenter._commit(results=(ALICE, ALAN))
        assert presenter.result_at(1) is ALAN

    def test_out_of_range(self, presenter):
        presenter._commit(results=(ALICE,))
        assert presenter.result_at(1) is None
        assert presenter.result_at(-1) is None
