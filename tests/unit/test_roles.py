"""Unit tests for role-based access control on the asset registry."""

import pytest

from occuland.registry import AccessControl, AssetRegistry, Role
from occuland.registry.errors import ErrorCode, InvalidArgument, Unauthorized


class TestInitialRoles:
    """Roles granted at construction."""

    def test_admin_is_deployer(self, asset_registry: AssetRegistry, deployer: str) -> None:
        assert asset_registry.has_role(AssetRegistry.DEFAULT_ADMIN_ROLE, deployer) is True

    def test_admin_not_open_to_minter(self, asset_registry: AssetRegistry, addr1: str) -> None:
        assert asset_registry.has_role(Role.ADMIN, addr1) is False

    def test_admin_not_open_to_others(self, asset_registry: AssetRegistry, addr2: str) -> None:
        assert asset_registry.has_role(Role.ADMIN, addr2) is False

    def test_minter_is_constructor_argument(self, asset_registry: AssetRegistry, addr1: str) -> None:
        assert asset_registry.has_role(AssetRegistry.MINTER_ROLE, addr1) is True

    def test_minter_not_deployer(self, asset_registry: AssetRegistry, deployer: str) -> None:
        assert asset_registry.has_role(Role.MINTER, deployer) is False

    def test_minter_not_others(self, asset_registry: AssetRegistry, addr2: str) -> None:
        assert asset_registry.has_role(Role.MINTER, addr2) is False

    def test_role_names_accepted_as_strings(self, asset_registry: AssetRegistry, addr1: str) -> None:
        assert asset_registry.has_role("MINTER_ROLE", addr1) is True
        assert asset_registry.has_role("NO_SUCH_ROLE", addr1) is False

    def test_admin_administers_every_role(self, asset_registry: AssetRegistry) -> None:
        assert asset_registry.get_role_admin(Role.MINTER) is Role.ADMIN
        assert asset_registry.get_role_admin(Role.ADMIN) is Role.ADMIN


class TestGrantRevoke:
    """Tests for grant_role / revoke_role."""

    def test_revoked_minter_cannot_mint(
        self, asset_registry: AssetRegistry, deployer: str, addr1: str, addr2: str
    ) -> None:
        asset_registry.revoke_role(deployer, Role.MINTER, addr1)

        assert asset_registry.has_role(Role.MINTER, addr1) is False
        with pytest.raises(Unauthorized, match="^x$"):
            asset_registry.mint(addr1, addr2, 1111, "uri")
        assert asset_registry.total_supply() == 0

    def test_regrant_restores_minting(
        self, asset_registry: AssetRegistry, deployer: str, addr1: str
    ) -> None:
        asset_registry.revoke_role(deployer, Role.MINTER, addr1)
        asset_registry.grant_role(deployer, Role.MINTER, addr1)

        assert asset_registry.has_role(Role.MINTER, addr1) is True
        asset_registry.mint(addr1, addr1, 1, "uri")
        assert asset_registry.total_supply() == 1

    def test_multiple_minters(
        self, asset_registry: AssetRegistry, deployer: str, addr1: str, addr3: str
    ) -> None:
        asset_registry.grant_role(deployer, Role.MINTER, addr3)

        assert asset_registry.has_role(Role.MINTER, addr1) is True
        assert asset_registry.has_role(Role.MINTER, addr3) is True
        assert asset_registry.role_members(Role.MINTER) == [addr1, addr3]

    def test_minter_does_not_become_admin(
        self, asset_registry: AssetRegistry, deployer: str, addr3: str
    ) -> None:
        asset_registry.grant_role(deployer, Role.MINTER, addr3)
        assert asset_registry.has_role(Role.ADMIN, addr3) is False

    def test_grant_is_idempotent(
        self, asset_registry: AssetRegistry, deployer: str, addr1: str
    ) -> None:
        receipt = asset_registry.grant_role(deployer, Role.MINTER, addr1)

        assert receipt.success is True
        assert receipt.events == []
        assert asset_registry.role_members(Role.MINTER) == [addr1]

    def test_revoke_is_idempotent(
        self, asset_registry: AssetRegistry, deployer: str, addr2: str
    ) -> None:
        receipt = asset_registry.revoke_role(deployer, Role.MINTER, addr2)

        assert receipt.events == []
        assert asset_registry.has_role(Role.MINTER, addr2) is False

    def test_grant_emits_role_granted(
        self, asset_registry: AssetRegistry, deployer: str, addr3: str
    ) -> None:
        receipt = asset_registry.grant_role(deployer, Role.MINTER, addr3)

        assert receipt.event_types() == ["RoleGranted"]
        assert receipt.events[0]["account"] == addr3
        assert receipt.events[0]["sender"] == deployer

    def test_non_admin_cannot_grant(
        self, asset_registry: AssetRegistry, addr1: str, addr2: str
    ) -> None:
        with pytest.raises(Unauthorized, match="missing role DEFAULT_ADMIN_ROLE") as exc_info:
            asset_registry.grant_role(addr1, Role.MINTER, addr2)

        assert exc_info.value.code == ErrorCode.NOT_AUTHORIZED
        assert asset_registry.has_role(Role.MINTER, addr2) is False

    def test_non_admin_cannot_revoke(
        self, asset_registry: AssetRegistry, addr1: str, addr2: str
    ) -> None:
        with pytest.raises(Unauthorized):
            asset_registry.revoke_role(addr2, Role.MINTER, addr1)
        assert asset_registry.has_role(Role.MINTER, addr1) is True

    def test_admin_can_grant_admin(
        self, asset_registry: AssetRegistry, deployer: str, addr2: str, addr3: str
    ) -> None:
        asset_registry.grant_role(deployer, Role.ADMIN, addr2)
        asset_registry.grant_role(addr2, Role.MINTER, addr3)

        assert asset_registry.has_role(Role.MINTER, addr3) is True

    def test_unknown_role_rejected(self, asset_registry: AssetRegistry, deployer: str, addr2: str) -> None:
        with pytest.raises(InvalidArgument):
            asset_registry.grant_role(deployer, "BURNER_ROLE", addr2)


class TestRenounce:
    """Tests for renounce_role."""

    def test_renounce_own_role(self, asset_registry: AssetRegistry, addr1: str) -> None:
        receipt = asset_registry.renounce_role(addr1, Role.MINTER, addr1)

        assert receipt.event_types() == ["RoleRevoked"]
        assert asset_registry.has_role(Role.MINTER, addr1) is False

    def test_cannot_renounce_for_others(
        self, asset_registry: AssetRegistry, deployer: str, addr1: str
    ) -> None:
        with pytest.raises(Unauthorized, match="can only renounce roles for self"):
            asset_registry.renounce_role(deployer, Role.MINTER, addr1)
        assert asset_registry.has_role(Role.MINTER, addr1) is True


class TestAccessControl:
    """Tests for the standalone role table."""

    def test_setup_role_skips_authorization(self) -> None:
        roles = AccessControl()

        assert roles.setup_role(Role.ADMIN, "alice") is True
        assert roles.setup_role(Role.ADMIN, "alice") is False
        assert roles.has_role(Role.ADMIN, "alice")

    def test_grant_and_revoke_report_changes(self) -> None:
        roles = AccessControl()
        roles.setup_role(Role.ADMIN, "alice")

        assert roles.grant_role("alice", Role.MINTER, "bob") is True
        assert roles.grant_role("alice", Role.MINTER, "bob") is False
        assert roles.revoke_role("alice", Role.MINTER, "bob") is True
        assert roles.revoke_role("alice", Role.MINTER, "bob") is False

    def test_check_role(self) -> None:
        roles = AccessControl()

        with pytest.raises(Unauthorized) as exc_info:
            roles.check_role(Role.MINTER, "carol")
        assert exc_info.value.details == {"account": "carol", "role": "MINTER_ROLE"}

    def test_empty_account_rejected(self) -> None:
        roles = AccessControl()

        with pytest.raises(InvalidArgument):
            roles.setup_role(Role.MINTER, "")
