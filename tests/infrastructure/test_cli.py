"""End-to-end tests of the command line over a temporary data directory."""

import re

import pytest
from click.testing import CliRunner

from crowdprice.domain.model.store import Store
from crowdprice.domain.model.user import Role, UserProfile
from crowdprice.infrastructure.cli.main import cli
from crowdprice.infrastructure.config import get_settings
from crowdprice.infrastructure.persistence.json_profile_repository import (
    JsonProfileRepository,
)
from crowdprice.infrastructure.persistence.json_store_repository import JsonStoreRepository


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("CROWDPRICE_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("CROWDPRICE_USER", raising=False)
    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()


@pytest.fixture
def runner():
    return CliRunner()


def _seed(data_dir):
    profiles = JsonProfileRepository(data_dir / "users.json")
    profiles.add(UserProfile.register("alice", "Alice", "alice@example.com"))
    rita = UserProfile.register("rita", "Rita", "rita@example.com")
    rita.role = Role.SUPERVISOR
    profiles.add(rita)
    stores = JsonStoreRepository(data_dir / "stores.json")
    store, _ = stores.get_or_create(Store.create("Dia", verified=True))
    return store.id


def _invoke(runner, *args):
    result = runner.invoke(cli, list(args))
    return result


def _created_id(output: str) -> str:
    return re.search(r"(?:Product|Price) ([0-9a-f]{32})", output).group(1)


class TestUserCommands:

    def test_register_and_show(self, runner, data_dir):
        result = _invoke(runner, "user", "register", "--id", "bob", "--name", "Bob",
                         "--email", "bob@example.com")
        assert result.exit_code == 0
        assert "User bob registered as usuario" in result.output

        result = _invoke(runner, "user", "show", "--id", "bob")
        assert result.exit_code == 0
        assert "Points:     0" in result.output

    def test_whoami_anonymous(self, runner, data_dir):
        result = _invoke(runner, "user", "whoami")
        assert result.exit_code == 0
        assert "Not signed in." in result.output

    def test_whoami_unknown_user(self, runner, data_dir):
        result = _invoke(runner, "--user", "ghost", "user", "whoami")
        assert result.exit_code != 0
        assert "No profile registered" in result.output


class TestPriceFlow:

    def test_submit_review_and_lowest(self, runner, data_dir):
        store_id = _seed(data_dir)

        result = _invoke(runner, "--user", "alice", "product", "add", "--name", "Leche",
                         "--brand", "La Serenisima", "--barcode", "7790742")
        assert result.exit_code == 0, result.output
        product_id = _created_id(result.output)

        result = _invoke(runner, "--user", "alice", "price", "submit", "--product",
                         product_id, "--store-id", store_id, "--amount", "150.00")
        assert result.exit_code == 0, result.output
        assert "submitted at $150.00  (state=pending)" in result.output
        price_id = _created_id(result.output)

        result = _invoke(runner, "product", "lowest", "--id", product_id)
        assert "No verified prices for this product." in result.output

        result = _invoke(runner, "--user", "rita", "review", "queue")
        assert price_id in result.output
        assert "Alice" in result.output

        result = _invoke(runner, "--user", "rita", "review", "approve", "--id", price_id)
        assert result.exit_code == 0, result.output
        assert f"Price {price_id} verified." in result.output

        result = _invoke(runner, "product", "lowest", "--id", product_id)
        assert "$150.00 at Dia" in result.output

        # 20 for the product, 10 for the approved price
        result = _invoke(runner, "user", "show", "--id", "alice")
        assert "Points:     30" in result.output

        result = _invoke(runner, "--user", "rita", "review", "reject", "--id", price_id)
        assert result.exit_code != 0
        assert "already reviewed" in result.output

    def test_submit_at_new_store_by_name(self, runner, data_dir):
        _seed(data_dir)
        result = _invoke(runner, "--user", "alice", "product", "add", "--name", "Pan",
                         "--brand", "Casero")
        product_id = _created_id(result.output)

        result = _invoke(runner, "--user", "alice", "price", "submit", "--product",
                         product_id, "--store-name", "Panaderia Luz", "--amount", "30")
        assert result.exit_code == 0, result.output

        result = _invoke(runner, "store", "list")
        assert "Panaderia Luz" not in result.output
        assert "Dia" in result.output

    def test_submit_needs_exactly_one_store_option(self, runner, data_dir):
        result = _invoke(runner, "--user", "alice", "price", "submit", "--product", "x",
                         "--amount", "1")
        assert result.exit_code != 0
        assert "exactly one" in result.output

    def test_invalid_amount_is_reported(self, runner, data_dir):
        store_id = _seed(data_dir)
        result = _invoke(runner, "--user", "alice", "product", "add", "--name", "Pan",
                         "--brand", "Casero")
        product_id = _created_id(result.output)

        result = _invoke(runner, "--user", "alice", "price", "submit", "--product",
                         product_id, "--store-id", store_id, "--amount", "0")

        assert result.exit_code != 0
        assert "greater than zero" in result.output

    def test_contributor_cannot_review(self, runner, data_dir):
        _seed(data_dir)
        result = _invoke(runner, "--user", "alice", "review", "queue")
        assert result.exit_code != 0
        assert "supervisors and admins" in result.output

    def test_anonymous_cannot_submit(self, runner, data_dir):
        store_id = _seed(data_dir)
        result = _invoke(runner, "price", "submit", "--product", "x", "--store-id",
                         store_id, "--amount", "1")
        assert result.exit_code != 0
        assert "signed in" in result.output


class TestCatalogCommands:

    def test_search_scan_and_featured(self, runner, data_dir):
        _seed(data_dir)
        result = _invoke(runner, "--user", "alice", "product", "add", "--name", "Yerba Mate",
                         "--brand", "Taragui", "--barcode", "7790387")
        product_id = _created_id(result.output)

        result = _invoke(runner, "product", "search", "yerba")
        assert product_id in result.output

        result = _invoke(runner, "product", "scan", "--barcode", "7790387")
        assert "Yerba Mate (Taragui)" in result.output

        result = _invoke(runner, "product", "scan", "--barcode", "000")
        assert "No product with barcode 000" in result.output

        result = _invoke(runner, "product", "featured")
        assert "No verified prices yet." in result.output

        result = _invoke(runner, "--user", "alice", "product", "add", "--name", "Otra",
                         "--brand", "Marca", "--barcode", "7790387")
        assert result.exit_code != 0

    def test_store_verification(self, runner, data_dir):
        _seed(data_dir)
        result = _invoke(runner, "--user", "alice", "store", "add", "--name", "Kiosco")
        assert "(unverified)" in result.output
        store_id = re.search(r"Store ([0-9a-f]{32})", result.output).group(1)

        result = _invoke(runner, "--user", "alice", "store", "verify", "--id", store_id)
        assert result.exit_code != 0

        result = _invoke(runner, "--user", "rita", "store", "verify", "--id", store_id)
        assert result.exit_code == 0, result.output
        assert "Kiosco" in _invoke(runner, "store", "list").output

    @pytest.mark.parametrize(
        "args", [["search", "yerba", "--limit", "0"], ["featured", "--window", "0"]]
    )
    def test_zero_bounds_are_rejected_not_defaulted(self, runner, data_dir, args):
        result = _invoke(runner, "product", *args)
        assert result.exit_code != 0
        assert "must be positive" in result.output
