"""End-to-end fallback scenarios with real providers on disk."""

import sys
from pathlib import Path
from typing import Iterator
from unittest.mock import patch

import pytest

from loaderchain import (
    Locator,
    PathProvider,
    Resolver,
    ResolverConfig,
    TypeNotFoundError,
    use_context_provider,
)


@pytest.fixture
def layout(tmp_path: Path) -> dict[str, Path]:
    """Three search roots: context, own and caller."""
    roots = {name: tmp_path / name for name in ("context", "own", "caller")}
    for root in roots.values():
        root.mkdir()
    (roots["own"] / "config.json").write_text('{"from": "own"}')
    (roots["caller"] / "config.json").write_text('{"from": "caller"}')
    (roots["caller"] / "caller-only.txt").write_text("caller")
    (roots["caller"] / "lc_scenario_app.py").write_text("class Service:\n    pass\n")
    (roots["caller"] / "lc_scenario_private.py").write_text(
        "class Plugin:\n    pass\n"
    )
    return roots


@pytest.fixture
def service_type(
    layout: dict[str, Path], monkeypatch: pytest.MonkeyPatch
) -> Iterator[type]:
    """A calling type imported from the caller root."""
    monkeypatch.syspath_prepend(str(layout["caller"]))
    import lc_scenario_app  # type: ignore[import-not-found]

    yield lc_scenario_app.Service
    sys.modules.pop("lc_scenario_app", None)


@pytest.fixture
def resolver(layout: dict[str, Path]) -> Resolver:
    return Resolver(own_provider=PathProvider([layout["own"]]))


class TestResourceScenarios:
    def test_own_tier_beats_caller_tier(
        self, layout: dict[str, Path], resolver: Resolver, service_type: type
    ) -> None:
        with use_context_provider(PathProvider([layout["context"]])):
            locator = resolver.get_resource("config.json", service_type)

        assert locator == Locator.from_path(layout["own"] / "config.json")

    def test_caller_tier_is_last_resort(
        self, layout: dict[str, Path], resolver: Resolver, service_type: type
    ) -> None:
        with use_context_provider(PathProvider([layout["context"]])):
            stream = resolver.get_resource_as_stream("caller-only.txt", service_type)

        assert stream is not None
        with stream:
            assert stream.read() == b"caller"

    def test_context_binding_wins(
        self, layout: dict[str, Path], resolver: Resolver, service_type: type
    ) -> None:
        (layout["context"] / "config.json").write_text("{}")

        with use_context_provider(PathProvider([layout["context"]])):
            locator = resolver.get_resource("config.json", service_type)

        assert locator == Locator.from_path(layout["context"] / "config.json")

    def test_missing_everywhere_logs_summary(
        self, layout: dict[str, Path], resolver: Resolver, service_type: type
    ) -> None:
        with patch("loaderchain.resolver.logger") as mock_logger:
            with use_context_provider(PathProvider([layout["context"]])):
                assert resolver.get_resource("absent.txt", service_type) is None

        warnings = [c.args[0] for c in mock_logger.warning.call_args_list]
        assert len(warnings) == 4
        assert str(layout["context"]) in warnings[0]
        assert str(layout["own"]) in warnings[1]
        assert str(layout["caller"]) in warnings[2]

    def test_resources_from_first_non_empty_tier(
        self, layout: dict[str, Path], service_type: type
    ) -> None:
        resolver = Resolver(
            own_provider=PathProvider([layout["context"], layout["own"]])
        )

        with use_context_provider(PathProvider([layout["context"]])):
            found = resolver.get_resources("config.json", service_type)

        assert found == [Locator.from_path(layout["own"] / "config.json")]

    def test_literal_mode_stops_at_empty_context(
        self, layout: dict[str, Path], service_type: type
    ) -> None:
        resolver = Resolver(
            config=ResolverConfig(empty_resources_fall_through=False),
            own_provider=PathProvider([layout["own"]]),
        )

        with use_context_provider(PathProvider([layout["context"]])):
            assert resolver.get_resources("config.json", service_type) == []


class TestTypeScenarios:
    def test_caller_provider_loads_private_type(
        self, layout: dict[str, Path], resolver: Resolver, service_type: type
    ) -> None:
        """Only the caller's root holds the module; tier four finds it."""
        # monkeypatch restores sys.path after the test
        sys.path.remove(str(layout["caller"]))

        with use_context_provider(PathProvider([layout["context"]])):
            plugin = resolver.load_type("lc_scenario_private.Plugin", service_type)

        assert plugin.__name__ == "Plugin"
        assert "lc_scenario_private" not in sys.modules

    def test_builtin_resolved_by_global_lookup(
        self, layout: dict[str, Path], resolver: Resolver, service_type: type
    ) -> None:
        with use_context_provider(PathProvider([layout["context"]])):
            assert resolver.load_type("bytes", service_type) is bytes

    def test_missing_type_raises(
        self, layout: dict[str, Path], resolver: Resolver, service_type: type
    ) -> None:
        with use_context_provider(PathProvider([layout["context"]])):
            with pytest.raises(TypeNotFoundError) as exc_info:
                resolver.load_type("lc_scenario_app.Nope", service_type)

        assert exc_info.value.type_name == "lc_scenario_app.Nope"
