"""
Script Tests
Entry points run against a mocked deployment context
"""

import importlib
import pytest
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

from blockchain.abis import TRACEABILITY_ABI, function_signature
from blockchain.call_descriptor import (
    PROFILE_EXECUTE_SIGNATURE,
    unwrap_key_manager_call,
    unwrap_profile_call
)
from deployer.runner import run
from utils.hashing import content_id, keccak_file
from conftest import (
    ASSET_ADDRESS,
    ISSUER_ADDRESS,
    KEY_MANAGER_ADDRESS,
    TEST_ADDRESS,
    TEST_PRIVATE_KEY,
    UP_ADDRESS
)

pytestmark = pytest.mark.usefixtures("clean_env")

SCRIPTS = [
    'allow_issuer_via_up_execute',
    'deploy_supplier_quality_lsp8',
    'deploy_compliance_certificate_lsp8',
    'deploy_battery_allowlist_testnet',
    'deploy_traceability',
    'mint_and_set_conformity_via_up'
]


def load_script(name):
    return importlib.import_module(f"scripts.{name}")


@pytest.fixture
def ctx(receipt):
    """Deployment context with mocked transactions and contracts"""
    transactions = MagicMock()
    transactions.send_call.return_value = receipt

    return SimpleNamespace(
        w3=MagicMock(),
        network={'key': 'luksoTestnet', 'chain_id': 4201},
        wallet=MagicMock(),
        transactions=transactions,
        contracts=MagicMock()
    )


class TestMissingEnvironment:
    """A missing variable exits non-zero before any network traffic"""

    @pytest.mark.parametrize("name", SCRIPTS)
    def test_missing_private_key(self, name, monkeypatch, tmp_path):
        monkeypatch.setenv('UP_ADDRESS', UP_ADDRESS)
        monkeypatch.setenv('ASSET_ADDRESS', ASSET_ADDRESS)
        document = tmp_path / "doc.pdf"
        document.write_bytes(b"demo")
        monkeypatch.setenv('DOCUMENT_PATH', str(document))

        with patch('deployer.context.RPCManager') as rpc_manager:
            assert run(load_script(name).main) == 1

        rpc_manager.assert_not_called()

    @pytest.mark.parametrize("name, variable", [
        ('deploy_compliance_certificate_lsp8', 'UP_ADDRESS'),
        ('deploy_traceability', 'UP_ADDRESS'),
        ('mint_and_set_conformity_via_up', 'UP_ADDRESS'),
        ('mint_and_set_conformity_via_up', 'ASSET_ADDRESS')
    ])
    def test_missing_address(self, name, variable, monkeypatch):
        monkeypatch.setenv('DEPLOYER_PRIVATE_KEY', TEST_PRIVATE_KEY)
        monkeypatch.setenv('UP_ADDRESS', UP_ADDRESS)
        monkeypatch.setenv('ASSET_ADDRESS', ASSET_ADDRESS)
        monkeypatch.delenv(variable)

        script = load_script(name)
        with patch.object(script, 'create_context') as create_context:
            assert run(script.main) == 1

        create_context.assert_not_called()

    def test_invalid_address(self, monkeypatch):
        monkeypatch.setenv('UP_ADDRESS', 'not-an-address')

        script = load_script('deploy_traceability')
        with patch.object(script, 'create_context') as create_context:
            assert run(script.main) == 1

        create_context.assert_not_called()


class TestAllowIssuer:
    """UP.execute(setIssuerAllowed) followed by the allow-list read"""

    def test_issuer_allowed(self, ctx):
        script = load_script('allow_issuer_via_up_execute')
        asset = ctx.contracts.get_contract.return_value
        asset.functions.isIssuerAllowed.return_value.call.return_value = True

        with patch.object(script, 'create_context', return_value=ctx):
            assert run(script.main) == 0

        call = ctx.transactions.send_call.call_args[0][0]
        assert call.target == UP_ADDRESS
        assert call.signature == PROFILE_EXECUTE_SIGNATURE

        inner = unwrap_profile_call(call, "setIssuerAllowed(address,bool)")
        assert inner.target == ASSET_ADDRESS
        assert inner.args == (ISSUER_ADDRESS, True)

        asset.functions.isIssuerAllowed.assert_called_with(ISSUER_ADDRESS)

    def test_not_allowed_is_only_a_warning(self, ctx, log_messages):
        script = load_script('allow_issuer_via_up_execute')
        asset = ctx.contracts.get_contract.return_value
        asset.functions.isIssuerAllowed.return_value.call.return_value = False

        with patch.object(script, 'create_context', return_value=ctx):
            assert run(script.main) == 0

        assert any(r['level'].name == 'WARNING' for r in log_messages)

    def test_revert_exits_non_zero(self, ctx):
        script = load_script('allow_issuer_via_up_execute')
        ctx.transactions.send_call.side_effect = RuntimeError("execution reverted")

        with patch.object(script, 'create_context', return_value=ctx):
            assert run(script.main) == 1


class TestDeployments:
    """Constructor arguments and post-deploy checks"""

    def test_supplier_quality(self, ctx, monkeypatch):
        monkeypatch.setenv('TOKEN_NAME', 'Quality')
        monkeypatch.setenv('TOKEN_SYMBOL', 'QQ')
        script = load_script('deploy_supplier_quality_lsp8')
        contract = ctx.contracts.deploy.return_value
        contract.functions.owner.return_value.call.return_value = script.DEFAULT_OWNER.lower()
        contract.functions.qualityOffice.return_value.call.return_value = script.DEFAULT_QUALITY_OFFICE

        with patch.object(script, 'create_context', return_value=ctx):
            assert run(script.main) == 0

        ctx.contracts.deploy.assert_called_once_with(
            'SupplierQualityLSP8',
            'Quality',
            'QQ',
            script.DEFAULT_OWNER,
            script.DEFAULT_QUALITY_OFFICE
        )

    @pytest.mark.parametrize("name, contract_name", [
        ('deploy_compliance_certificate_lsp8', 'ComplianceCertificateLSP8'),
        ('deploy_traceability', 'Traceability_test2')
    ])
    def test_up_owned_deployments(self, name, contract_name, ctx, monkeypatch):
        monkeypatch.setenv('UP_ADDRESS', UP_ADDRESS)
        script = load_script(name)

        with patch.object(script, 'create_context', return_value=ctx):
            assert run(script.main) == 0

        ctx.contracts.deploy.assert_called_once_with(contract_name, UP_ADDRESS)

    def test_battery_owner_check_skipped(self, ctx):
        from web3.exceptions import BadFunctionCallOutput

        script = load_script('deploy_battery_allowlist_testnet')
        contract = ctx.contracts.deploy.return_value
        contract.functions.owner.return_value.call.side_effect = BadFunctionCallOutput("no owner")

        with patch.object(script, 'create_context', return_value=ctx):
            assert run(script.main) == 0

        ctx.contracts.deploy.assert_called_once_with(
            'BatteryCarbonCertificateLSP8',
            'Battery Carbon Certificate',
            'BCC',
            script.DEFAULT_UP_OWNER
        )


class TestMintAndSetConformity:
    """KeyManager -> UP -> asset relay"""

    @pytest.fixture
    def document(self, tmp_path, monkeypatch):
        path = tmp_path / "conformity.pdf"
        path.write_bytes(b"%PDF-1.4 conformity")

        monkeypatch.setenv('UP_ADDRESS', UP_ADDRESS)
        monkeypatch.setenv('ASSET_ADDRESS', ASSET_ADDRESS)
        monkeypatch.setenv('DOCUMENT_PATH', str(path))
        return path

    @pytest.fixture
    def mint_ctx(self, ctx):
        profile = MagicMock()
        profile.functions.owner.return_value.call.return_value = KEY_MANAGER_ADDRESS
        ctx.contracts.get_contract.return_value = profile
        ctx.contracts.load_abi.return_value = TRACEABILITY_ABI
        return ctx

    def _inner_calls(self, ctx):
        set_signature = function_signature(TRACEABILITY_ABI, 'setConformityData')
        signatures = ["mintCert(bytes32,address,bytes)", set_signature, "freezeConformity()"]
        inner = []

        for (outer,), _ in ctx.transactions.send_call.call_args_list:
            assert outer.target == KEY_MANAGER_ADDRESS
            profile_call = unwrap_key_manager_call(outer, UP_ADDRESS)
            inner.append(unwrap_profile_call(profile_call, signatures[len(inner)]))

        return inner

    def test_mint_then_set(self, mint_ctx, document):
        script = load_script('mint_and_set_conformity_via_up')

        with patch.object(script, 'create_context', return_value=mint_ctx):
            assert run(script.main) == 0

        mint, set_data = self._inner_calls(mint_ctx)
        token_id = bytes(content_id(script.DEFAULT_CERTIFICATE_ID))

        assert mint.target == ASSET_ADDRESS
        assert mint.args == (token_id, UP_ADDRESS, b'')

        record_token_id, record = set_data.args
        assert record_token_id == token_id
        assert record[0] == token_id
        assert record[6] == bytes(keccak_file(str(document)))
        assert record[7] == script.DEFAULT_DOCUMENT_URI
        assert record[8] == script.STATUS_VALID

    def test_freeze_when_requested(self, mint_ctx, document, monkeypatch):
        monkeypatch.setenv('FREEZE_CONFORMITY', 'true')
        script = load_script('mint_and_set_conformity_via_up')

        with patch.object(script, 'create_context', return_value=mint_ctx):
            assert run(script.main) == 0

        assert len(self._inner_calls(mint_ctx)) == 3

    def test_missing_document(self, mint_ctx, document, monkeypatch):
        monkeypatch.setenv('DOCUMENT_PATH', str(document) + '.missing')
        script = load_script('mint_and_set_conformity_via_up')

        with patch.object(script, 'create_context', return_value=mint_ctx) as create_context:
            assert run(script.main) == 1

        create_context.assert_not_called()

    def test_default_document_path(self, mint_ctx, monkeypatch, tmp_path):
        monkeypatch.setenv('UP_ADDRESS', UP_ADDRESS)
        monkeypatch.setenv('ASSET_ADDRESS', ASSET_ADDRESS)
        monkeypatch.chdir(tmp_path)
        document = tmp_path / "metadata" / "conformita_demo.pdf"
        document.parent.mkdir()
        document.write_bytes(b"%PDF-1.4 demo")

        script = load_script('mint_and_set_conformity_via_up')
        assert script.DEFAULT_DOCUMENT_PATH == "metadata/conformita_demo.pdf"

        with patch.object(script, 'create_context', return_value=mint_ctx), \
                patch.object(script, 'keccak_file', wraps=keccak_file) as hash_file:
            assert run(script.main) == 0

        hash_file.assert_called_once_with("metadata/conformita_demo.pdf")
        _, set_data = self._inner_calls(mint_ctx)
        assert set_data.args[1][6] == bytes(keccak_file(str(document)))

    def test_record_follows_abi_field_order(self):
        script = load_script('mint_and_set_conformity_via_up')
        record = script.build_conformity_record(
            "CERT-1", "company", "batch", "STD", b'\x01' * 32, "ipfs://x", issued_at=100
        )
        reordered_abi = [{
            "type": "function",
            "name": "setConformityData",
            "inputs": [
                {"name": "tokenId", "type": "bytes32"},
                {"name": "data", "type": "tuple", "components": [
                    {"name": "status", "type": "uint8"},
                    {"name": "issuedAt", "type": "uint64"}
                ]}
            ]
        }]

        assert script.conformity_args(reordered_abi, b'\x02' * 32, record) == (b'\x02' * 32, (0, 100))


class TestContext:
    """Shared script setup"""

    def test_signer_logged_once(self, monkeypatch, log_messages):
        from deployer.context import create_context

        monkeypatch.setenv('DEPLOYER_PRIVATE_KEY', TEST_PRIVATE_KEY)

        with patch('deployer.context.RPCManager') as rpc_manager:
            rpc_manager.return_value.chain_id = 4201
            rpc_manager.return_value.network = {'key': 'luksoTestnet', 'chain_id': 4201}
            ctx = create_context()

        assert ctx.wallet.address == TEST_ADDRESS
        assert sum(TEST_ADDRESS in r['message'] for r in log_messages) == 1
