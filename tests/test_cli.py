"""Tests for the oracle-cli commands."""

from pathlib import Path

from click.testing import CliRunner
from pycardano import PaymentVerificationKey

from optimistic_oracle_core.blockchain.state_store import StateStore
from optimistic_oracle_core.cli.main import cli
from optimistic_oracle_core.constants.status import RequestStatus


class TestCli:
    def setup_method(self) -> None:
        self.runner = CliRunner()

    def invoke(self, config_dir: Path, *args: str):
        return self.runner.invoke(
            cli, [*args[:2], "--config", str(config_dir / "config.yml"), *args[2:]]
        )

    def own_vkh(self, config_dir: Path) -> str:
        vkey = PaymentVerificationKey.load(str(config_dir / "keys" / "payment.vkey"))
        return vkey.hash().payload.hex()

    def test_keys_generate(self, tmp_path: Path) -> None:
        output_dir = tmp_path / "wallet"

        result = self.runner.invoke(
            cli, ["keys", "generate", "--output-dir", str(output_dir)]
        )

        assert result.exit_code == 0, result.output
        vkh = (output_dir / "payment.vkh").read_text()
        assert vkh in result.output
        assert (output_dir / "payment.skey").exists()

        again = self.runner.invoke(
            cli, ["keys", "generate", "--output-dir", str(output_dir)]
        )
        assert again.exit_code != 0
        assert "already exists" in again.output

    def test_fund_and_balance(self, config_dir: Path) -> None:
        funded = self.invoke(config_dir, "account", "fund", "--amount", "5000")
        balance = self.invoke(config_dir, "account", "balance")

        assert funded.exit_code == 0, funded.output
        assert balance.exit_code == 0, balance.output
        assert "Balance: 5000" in balance.output
        assert self.own_vkh(config_dir) in balance.output

    def test_request_create_show_cancel(self, config_dir: Path) -> None:
        vkh = self.own_vkh(config_dir)
        assert self.invoke(config_dir, "oracle", "init", "--admin", vkh).exit_code == 0
        self.invoke(config_dir, "account", "fund", "--amount", "5000")

        created = self.invoke(
            config_dir,
            "request",
            "create",
            "--question",
            "Will the launch happen on time?",
            "--reward",
            "1000",
            "--expires-in",
            "86400",
        )
        assert created.exit_code == 0, created.output
        assert "Request id: 1" in created.output

        shown = self.invoke(config_dir, "request", "show", "--request-id", "1")
        assert "Will the launch happen on time?" in shown.output
        assert "CREATED" in shown.output
        assert "reward pool (1000)" in shown.output

        listed = self.invoke(config_dir, "request", "list", "--status", "created")
        assert "#1" in listed.output

        early = self.invoke(
            config_dir, "request", "propose", "--request-id", "1", "--answer", "YES"
        )
        assert early.exit_code != 0
        assert "rejected" in early.output

        cancelled = self.invoke(config_dir, "request", "cancel", "--request-id", "1")
        assert cancelled.exit_code == 0, cancelled.output

        audit = self.invoke(config_dir, "request", "audit", "--request-id", "1")
        assert audit.exit_code == 0, audit.output
        assert "balanced" in audit.output

        balance = self.invoke(config_dir, "account", "balance")
        assert "Balance: 5000" in balance.output

        program = StateStore(config_dir / "state" / "oracle_state.json").load()
        assert program.get_request(1).status == RequestStatus.CANCELLED
        assert program.registry.admin.payload.hex() == vkh

    def test_stats(self, config_dir: Path) -> None:
        vkh = self.own_vkh(config_dir)
        self.invoke(config_dir, "oracle", "init", "--admin", vkh)

        result = self.invoke(config_dir, "oracle", "stats", "--proposer", vkh)

        assert result.exit_code == 0, result.output
        assert "Total: 0" in result.output
        assert "Success rate: 0.0%" in result.output

    def test_create_requires_single_expiry_option(self, config_dir: Path) -> None:
        result = self.invoke(
            config_dir, "request", "create", "--question", "Q?", "--reward", "10"
        )

        assert result.exit_code == 2
        assert "--expiry or --expires-in" in result.output

    def test_show_unknown_request(self, config_dir: Path) -> None:
        result = self.invoke(config_dir, "request", "show", "--request-id", "9")

        assert result.exit_code == 1
        assert "not found" in result.output.lower()

    def test_init_rejects_invalid_admin(self, config_dir: Path) -> None:
        result = self.invoke(config_dir, "oracle", "init", "--admin", "zz")

        assert result.exit_code == 2
