"""Unit tests for the tracing decorator."""

import asyncio

import pytest

from restaurant_site_service.observability import traced


@pytest.mark.unit
class TestTraced:
    """Tests for the traced decorator."""

    def test_sync_function_returns_value(self) -> None:
        """Test that wrapped sync functions return their result."""

        @traced("test.add")
        def add(a: int, b: int) -> int:
            return a + b

        assert add(2, 3) == 5
        assert add.__name__ == "add"

    def test_sync_function_reraises(self) -> None:
        """Test that exceptions pass through the span."""

        @traced()
        def fail() -> None:
            raise ValueError("bad")

        with pytest.raises(ValueError, match="bad"):
            fail()

    @pytest.mark.asyncio
    async def test_async_function_returns_value(self) -> None:
        """Test that coroutine functions keep an async wrapper."""

        @traced("test.double")
        async def double(value: int) -> int:
            return value * 2

        assert asyncio.iscoroutinefunction(double)
        assert await double(4) == 8

    @pytest.mark.asyncio
    async def test_async_function_reraises(self) -> None:
        """Test that exceptions from coroutines pass through the span."""

        @traced()
        async def fail() -> None:
            raise RuntimeError("store down")

        with pytest.raises(RuntimeError, match="store down"):
            await fail()
