import asyncio

import pytest

from ai_compare.core.aggregator import NotificationOutcome, QueryResult, aggregate
from ai_compare.providers.base import ProviderResult


def delayed(result: ProviderResult, delay: float, finished: list, name: str):
    async def adapter(query: str) -> ProviderResult:
        await asyncio.sleep(delay)
        finished.append(name)
        return result

    return adapter


class TestAggregate:
    @pytest.mark.asyncio
    async def test_order_is_by_provider_not_arrival(self):
        finished = []
        adapters = {
            "gemini": delayed(ProviderResult.ok("g"), 0.02, finished, "gemini"),
            "cohere": delayed(ProviderResult.ok("c"), 0.05, finished, "cohere"),
            "mistral": delayed(ProviderResult.ok("m"), 0.0, finished, "mistral"),
        }

        result = await aggregate("q", adapters)

        assert finished == ["mistral", "gemini", "cohere"]
        assert list(result.responses) == ["gemini", "cohere", "mistral"]
        assert [r.text for r in result.responses.values()] == ["g", "c", "m"]

    @pytest.mark.asyncio
    async def test_calls_run_concurrently(self):
        started = []
        release = asyncio.Event()

        def waiting(name):
            async def adapter(query):
                started.append(name)
                await release.wait()
                return ProviderResult.ok(name)

            return adapter

        task = asyncio.create_task(aggregate("q", {n: waiting(n) for n in ("gemini", "cohere", "mistral")}))
        await asyncio.sleep(0.01)
        assert sorted(started) == ["cohere", "gemini", "mistral"]
        assert not task.done()

        release.set()
        result = await task
        assert len(result.responses) == 3

    @pytest.mark.asyncio
    async def test_one_failure_does_not_taint_others(self):
        finished = []
        adapters = {
            "gemini": delayed(ProviderResult.fail("Error 500: boom"), 0.0, finished, "gemini"),
            "cohere": delayed(ProviderResult.ok("c"), 0.01, finished, "cohere"),
            "mistral": delayed(ProviderResult.ok("m"), 0.01, finished, "mistral"),
        }

        result = await aggregate("q", adapters)

        assert result.responses["gemini"].success is False
        assert result.responses["cohere"] == ProviderResult.ok("c")
        assert result.responses["mistral"] == ProviderResult.ok("m")
        assert result.succeeded == 2

    @pytest.mark.asyncio
    async def test_query_reaches_every_adapter_verbatim(self):
        received = []

        async def echo(query):
            received.append(query)
            return ProviderResult.ok(query)

        await aggregate("  ¿qué tal? <b>", {"gemini": echo, "cohere": echo, "mistral": echo})

        assert received == ["  ¿qué tal? <b>"] * 3


class TestQueryResult:
    def test_to_dict_without_notification(self):
        result = QueryResult(
            responses={"gemini": ProviderResult.ok("hi"), "cohere": ProviderResult.fail("Error 401: no")}
        )

        assert result.to_dict() == {
            "gemini": {"success": True, "text": "hi"},
            "cohere": {"success": False, "error": "Error 401: no"},
        }

    def test_to_dict_with_notification(self):
        result = QueryResult(responses={"gemini": ProviderResult.ok("hi")})
        result.notification = NotificationOutcome(sent=False, message="Discord no configurado")

        assert result.to_dict()["notification"] == {"sent": False, "message": "Discord no configurado"}
