# tests/test_generation_service.py
"""
End-to-end pipeline: builder -> gateway (fake SDK) -> negotiator -> store.
"""
import json

import httpx
import openai
import pytest

from sitebuilder.core.errors import InvalidInput, PersistenceError, RateLimited
from sitebuilder.services.gateway_client import ModelGatewayClient
from sitebuilder.services.generation_service import SAVE_FAILED_WARNING, GenerationService
from sitebuilder.services.generation_types import GenerationOptions, GenerationResult
from tests.base import fake_sdk_client, history_store, run

PAGE = "<html>...</html>"


def _service(store, content=None, error=None):
    sdk = fake_sdk_client(content, error)
    return GenerationService(ModelGatewayClient(client=sdk), store), sdk


def test_scenario_a_markup_only():
    async def scenario():
        async with history_store() as store:
            service, _ = _service(store, PAGE)
            outcome = await service.generate("user-1", "A landing page for a bakery")
            return outcome, await store.list("user-1")

    outcome, records = run(scenario())
    assert outcome.result == GenerationResult(markup=PAGE, has_backend=False)
    assert outcome.saved is True
    assert records[0].id == outcome.record.id
    assert records[0].result.has_backend is False
    assert records[0].prompt == "A landing page for a bakery"


def test_scenario_b_structured_backend():
    raw = json.dumps({"html": PAGE, "hasBackend": True, "databaseSchema": "CREATE TABLE todos(...)"})

    async def scenario():
        async with history_store() as store:
            service, sdk = _service(store, raw)
            outcome = await service.generate("user-1", "A todo app with login", GenerationOptions(include_backend=True))
            return outcome, await store.list("user-1"), sdk

    outcome, records, sdk = run(scenario())
    assert outcome.result == GenerationResult(
        markup=PAGE,
        has_backend=True,
        database_schema="CREATE TABLE todos(...)",
        backend_code=None,
        edge_functions=None,
    )
    assert records[0].result == outcome.result
    assert '"html"' in sdk.chat.completions.calls[0]["messages"][0]["content"]


def test_scenario_c_model_ignored_json_instruction():
    async def scenario():
        async with history_store() as store:
            service, _ = _service(store, PAGE)
            return await service.generate("user-1", "A portfolio site", GenerationOptions(include_backend=True))

    outcome = run(scenario())
    assert outcome.result == GenerationResult(markup=PAGE, has_backend=False)
    assert outcome.saved is True


def test_rate_limited_persists_nothing():
    request = httpx.Request("POST", "https://gateway.test/v1/chat/completions")
    err = openai.RateLimitError("Error code: 429", response=httpx.Response(429, request=request), body=None)
    prompt = "A landing page for a bakery"

    async def scenario():
        async with history_store() as store:
            service, _ = _service(store, error=err)
            with pytest.raises(RateLimited):
                await service.generate("user-1", prompt)
            return await store.list("user-1")

    assert run(scenario()) == []
    assert prompt == "A landing page for a bakery"


def test_blank_prompt_makes_no_gateway_call():
    async def scenario():
        async with history_store() as store:
            service, sdk = _service(store, PAGE)
            with pytest.raises(InvalidInput):
                await service.generate("user-1", "   ")
            return sdk

    assert run(scenario()).chat.completions.calls == []


class _FailingStore:
    async def append(self, owner_id, prompt, result, website_url=None):
        raise PersistenceError()


def test_save_failure_still_delivers_result():
    service = GenerationService(ModelGatewayClient(client=fake_sdk_client(PAGE)), _FailingStore())
    outcome = run(service.generate("user-1", "A bakery"))

    assert outcome.result.markup == PAGE
    assert outcome.saved is False
    assert outcome.record is None
    assert outcome.warnings == [SAVE_FAILED_WARNING]
