"""Shared pytest fixtures for findpeople tests."""

import asyncio
import logging

import pytest

from findpeople.config import constants
from findpeople.models import Profile
from findpeople.services.memory_directory import InMemoryDirectoryService

ME = Profile(id="me", username="me", display_name="Me Myself")
ALICE = Profile(id="p-1", username="alice", display_name="Alice Martin", is_verified=True)
ALAN = Profile(id="p-2", username="alan", display_name="Alan Turing")
JDOE = Profile(id="p-3", username="jdoe", display_name="")
JANE = Profile(id="p-4", username="jane", display_name="Jane Doe")


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep config, UI prefs and log files out of the real home directory."""
    config_dir = tmp_path / "config"
    monkeypatch.setattr(constants, "FINDPEOPLE_CONFIG_DIR", config_dir)
    for name in constants.ENV_VAR_DEFINITIONS:
        monkeypatch.delenv(name, raising=False)

    yield config_dir

    root = logging.getLogger("findpeople")
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()


@pytest.fixture
def profiles():
    return [ME, ALICE, ALAN, JDOE, JANE]


@pytest.fixture
def directory(profiles):
    """In-memory directory signed in as ME."""
    return InMemoryDirectoryService(profiles, current_user_id=ME.id)


class GatedDirectory:
    """Directory whose searches block until the test releases them.

    ``outcomes`` maps query -> list of profiles or an exception to raise.
    """

    def __init__(self, outcomes):
        self.outcomes = outcomes
        self.gates = {query: asyncio.Event() for query in outcomes}
        self.search_calls = []
        self.request_calls = []
        self.request_outcome = None
        self.request_gate = asyncio.Event()
        self.request_gate.set()

    def release(self, query):
        self.gates[query].set()

    async def search_users(self, query):
        self.search_calls.append(query)
        await self.gates[query].wait()
        outcome = self.outcomes[query]
        if isinstance(outcome, Exception):
            raise outcome
        return list(outcome)

    async def send_connection_request(self, user_id):
        self.request_calls.append(user_id)
        await self.request_gate.wait()
        if isinstance(self.request_outcome, Exception):
            raise self.request_outcome
        return None

    async def get_profile(self, user_id):
        raise NotImplementedError


@pytest.fixture
def gated_directory_factory():
    return GatedDirectory
