"""Shared fixtures for upgradekit tests."""

from typing import List

import pytest

from upgradekit.compatibility import CheckSettings
from upgradekit.hardware import PlatformFacts
from upgradekit.processor import ProcessorIdentity
from upgradekit.tables import RetrievalResult


class StubFetcher:
    """Records every URL it is asked for and returns a canned result."""

    def __init__(self, records=None, error=None):
        self.records = records if records is not None else []
        self.error = error
        self.calls: List[str] = []

    def __call__(self, url: str) -> RetrievalResult:
        self.calls.append(url)
        if self.error is not None:
            return RetrievalResult.failure(url, self.error)
        return RetrievalResult(url=url, records=list(self.records))


class StubPresenter:
    """Presenter that remembers its requests and answers with a fixed choice."""

    def __init__(self, answer: bool = False):
        self.answer = answer
        self.requests = []

    def present(self, request, allow_override: bool = False) -> bool:
        self.requests.append((request, allow_override))
        return self.answer and allow_override


@pytest.fixture
def good_facts() -> PlatformFacts:
    return PlatformFacts(
        booted_uefi=True,
        secure_boot=True,
        tpm_active=True,
        tpm_enabled=True,
        tpm_is_v2=True,
        memory_mb=8192,
        is_vm=False,
    )


@pytest.fixture
def vm_facts(good_facts) -> PlatformFacts:
    return good_facts.model_copy(update={"is_vm": True})


@pytest.fixture
def intel_identity() -> ProcessorIdentity:
    return ProcessorIdentity(manufacturer="Intel", brand="Core", model="i7-10700K")


@pytest.fixture
def intel_records():
    return [{"Processor": "Intel Core i7-10700K"}]


@pytest.fixture
def settings() -> CheckSettings:
    return CheckSettings()


@pytest.fixture
def fetcher_factory():
    return StubFetcher


@pytest.fixture
def presenter_factory():
    return StubPresenter
