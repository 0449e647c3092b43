"""
Tests for loan action routing and loan queries
"""

import asyncio
import pytest
from unittest.mock import AsyncMock, Mock

from nftfi_sdk import (
    MAINNET,
    Account,
    ActionResult,
    AdapterFactory,
    ApiError,
    BaseLoanAdapter,
    ContractName,
    ErrorHandler,
    AssertionFailedError,
    Loans,
    NftfiClient,
)

from conftest import make_offer_options, WETH_ADDRESS

ACCOUNT_ADDRESS = "0x" + "4" * 40

ACCEPTING_CONTRACTS = [name for name in ContractName if name is not ContractName.V1_FIXED]


def mock_adapters():
    adapters = {}
    for name in ContractName:
        adapter = Mock(spec=BaseLoanAdapter)
        adapter.accept_function = AdapterFactory.DEFAULT_ADAPTERS[name].accept_function
        adapter.accept_offer = AsyncMock(return_value=ActionResult(receipt={"status": 1}, status=True))
        adapter.pay_back_loan = AsyncMock(return_value=ActionResult(receipt={"status": 1}, status=True))
        adapter.liquidate_overdue_loan = AsyncMock(return_value=True)
        adapter.cancel_loan_commitment_before_loan_has_begun = AsyncMock(return_value=True)
        adapters[name] = adapter
    return adapters


class TestLoanActionRouting:
    """Dispatch of begin/liquidate/repay/revoke_offer by contract version"""

    @pytest.fixture
    def adapters(self):
        return mock_adapters()

    @pytest.fixture
    def loans(self, api, signer_account, adapters):
        return Loans(api, signer_account, MAINNET, adapters)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", ACCEPTING_CONTRACTS)
    async def test_begin_dispatches_to_matching_adapter_only(self, loans, adapters, name):
        response = await loans.begin(make_offer_options(name.value))

        assert response == {"receipt": {"status": 1}, "status": True}
        adapters[name].accept_offer.assert_awaited_once()
        offer = adapters[name].accept_offer.call_args.args[0]
        assert offer.contract_name == name.value
        for other, adapter in adapters.items():
            if other is not name:
                adapter.accept_offer.assert_not_called()

    @pytest.mark.asyncio
    async def test_begin_unsupported_contract(self, loans, adapters):
        response = await loans.begin(make_offer_options("v3.loan.fixed"))

        assert response == {"errors": {"nftfi.contract.name": ["v3.loan.fixed not supported"]}}
        for adapter in adapters.values():
            adapter.accept_offer.assert_not_called()

    @pytest.mark.asyncio
    async def test_begin_unsupported_contract_with_raising_handler(self, api, signer_account, adapters):
        loans = Loans(api, signer_account, MAINNET, adapters, error=ErrorHandler(raise_errors=True))

        response = await loans.begin(make_offer_options("v3.loan.fixed"))

        assert response == {"errors": {"nftfi.contract.name": ["v3.loan.fixed not supported"]}}

    @pytest.mark.asyncio
    async def test_begin_malformed_offer(self, loans, adapters):
        options = make_offer_options("v2-3.loan.fixed", principal="1.5")

        response = await loans.begin(options)

        assert list(response["errors"]) == ["offer.terms.loan.principal"]
        adapters[ContractName.V2_3_FIXED].accept_offer.assert_not_called()

    @pytest.mark.asyncio
    async def test_begin_v1_is_not_supported(self, loans, adapters):
        response = await loans.begin(make_offer_options("v1.loan.fixed"))

        assert response == {"errors": {"nftfi.contract.name": ["v1.loan.fixed not supported"]}}
        adapters[ContractName.V1_FIXED].accept_offer.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path,value", [
        ("nftfi.fee.bps", 499.9),
        ("terms.loan.duration", 604800.5),
        ("terms.loan.expiry", "1690548548.25"),
    ])
    async def test_begin_rejects_fractional_integers(self, loans, adapters, path, value):
        options = make_offer_options("v2-3.loan.fixed")
        target = options["offer"]
        *parents, leaf = path.split(".")
        for key in parents:
            target = target[key]
        target[leaf] = value

        response = await loans.begin(options)

        assert list(response["errors"]) == [f"offer.{path}"]
        adapters[ContractName.V2_3_FIXED].accept_offer.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("verb", ["liquidate", "repay"])
    async def test_fractional_loan_id_is_rejected(self, loans, adapters, verb):
        response = await getattr(loans, verb)({"loan": {"id": 3.7}, "nftfi": {"contract": {"name": "v2-3.loan.fixed"}}})

        assert list(response["errors"]) == ["loan.id"]
        adapters[ContractName.V2_3_FIXED].liquidate_overdue_loan.assert_not_called()
        adapters[ContractName.V2_3_FIXED].pay_back_loan.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", list(ContractName))
    async def test_liquidate_dispatch(self, loans, adapters, name):
        response = await loans.liquidate({"loan": {"id": 3}, "nftfi": {"contract": {"name": name.value}}})

        assert response == {"success": True}
        adapters[name].liquidate_overdue_loan.assert_awaited_once_with(3)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", list(ContractName))
    async def test_repay_dispatch(self, loans, adapters, name):
        response = await loans.repay({"loan": {"id": "2"}, "nftfi": {"contract": {"name": name.value}}})

        assert response == {"receipt": {"status": 1}, "status": True}
        adapters[name].pay_back_loan.assert_awaited_once_with(2)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", list(ContractName))
    async def test_revoke_offer_dispatch(self, loans, adapters, name):
        response = await loans.revoke_offer({"offer": {"nonce": 42}, "nftfi": {"contract": {"name": name.value}}})

        assert response == {"success": True}
        adapters[name].cancel_loan_commitment_before_loan_has_begun.assert_awaited_once_with("42")

    @pytest.mark.asyncio
    async def test_unsupported_contract_on_other_verbs_is_silent_failure(self, loans, adapters):
        nftfi = {"contract": {"name": "v9.loan.fixed"}}

        assert await loans.liquidate({"loan": {"id": 1}, "nftfi": nftfi}) == {"success": False}
        assert await loans.repay({"loan": {"id": 1}, "nftfi": nftfi}) == {"receipt": None, "status": False}
        assert await loans.revoke_offer({"offer": {"nonce": "1"}, "nftfi": nftfi}) == {"success": False}
        for adapter in adapters.values():
            adapter.liquidate_overdue_loan.assert_not_called()
            adapter.pay_back_loan.assert_not_called()
            adapter.cancel_loan_commitment_before_loan_has_begun.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("verb,options", [
        ("begin", make_offer_options()),
        ("liquidate", {"loan": {"id": 1}, "nftfi": {"contract": {"name": "v2-3.loan.fixed"}}}),
        ("repay", {"loan": {"id": 1}, "nftfi": {"contract": {"name": "v2-3.loan.fixed"}}}),
        ("revoke_offer", {"offer": {"nonce": "1"}, "nftfi": {"contract": {"name": "v2-3.loan.fixed"}}}),
    ])
    async def test_signer_required(self, api, adapters, verb, options):
        loans = Loans(api, Account(address=ACCOUNT_ADDRESS), MAINNET, adapters)

        response = await getattr(loans, verb)(options)

        assert response == {"errors": {"account.signer": ["A signer is required for this action"]}}
        for adapter in adapters.values():
            adapter.accept_offer.assert_not_called()
            adapter.liquidate_overdue_loan.assert_not_called()

    @pytest.mark.asyncio
    async def test_signer_required_raises_with_raising_handler(self, api, adapters):
        loans = Loans(api, Account(), MAINNET, adapters, error=ErrorHandler(raise_errors=True))

        with pytest.raises(AssertionFailedError):
            await loans.repay({"loan": {"id": 1}, "nftfi": {"contract": {"name": "v2-3.loan.fixed"}}})

    @pytest.mark.asyncio
    async def test_missing_loan_id(self, loans):
        response = await loans.liquidate({"nftfi": {"contract": {"name": "v2-3.loan.fixed"}}})

        assert list(response["errors"]) == ["loan"]


class TestLoansEndToEnd:
    """Router, adapters and a mocked contract backend together"""

    @pytest.fixture
    def client(self, api, signer_account, contract_factory):
        return NftfiClient(
            config=MAINNET,
            account=signer_account,
            api=api,
            contract_factory=contract_factory,
        )

    @pytest.mark.asyncio
    async def test_liquidate_success(self, client, contract_handle):
        response = await client.loans.liquidate({
            "loan": {"id": 3},
            "nftfi": {"contract": {"name": "v2-3.loan.fixed.collection"}},
        })

        assert response == {"success": True}
        contract_handle.call.assert_awaited_once_with("liquidateOverdueLoan", [3])

    @pytest.mark.asyncio
    async def test_liquidate_timeout(self, client, contract_handle):
        contract_handle.call.side_effect = asyncio.TimeoutError()

        response = await client.loans.liquidate({
            "loan": {"id": 3},
            "nftfi": {"contract": {"name": "v2-3.loan.fixed.collection"}},
        })

        assert response == {"success": False}

    @pytest.mark.asyncio
    async def test_begin_collection_offer(self, client, contract_factory, contract_handle):
        response = await client.loans.begin(make_offer_options("v2-3.loan.fixed.collection"))

        assert response["status"] is True
        assert contract_handle.call.call_args.args[0] == "acceptCollectionOffer"
        contract_factory.create.assert_called_once_with(
            address=MAINNET.contract(ContractName.V2_3_FIXED_COLLECTION).address,
            abi=MAINNET.contract(ContractName.V2_3_FIXED_COLLECTION).abi,
        )

    @pytest.mark.asyncio
    async def test_repay_reverted(self, client, contract_handle):
        contract_handle.call.return_value = {"status": 0}

        response = await client.loans.repay({"loan": {"id": 2}, "nftfi": {"contract": {"name": "v2-3.loan.fixed"}}})

        assert response == {"receipt": {"status": 0}, "status": False}

    def test_no_handles_created_at_construction(self, client, contract_factory):
        assert set(client.adapters) == set(ContractName)
        contract_factory.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_begin_v1_returns_structured_error(self, client, contract_factory, contract_handle):
        response = await client.loans.begin(make_offer_options("v1.loan.fixed"))

        assert response == {"errors": {"nftfi.contract.name": ["v1.loan.fixed not supported"]}}
        contract_factory.create.assert_not_called()
        contract_handle.call.assert_not_called()

    @pytest.mark.asyncio
    async def test_liquidate_fractional_id_makes_no_call(self, client, contract_handle):
        response = await client.loans.liquidate({
            "loan": {"id": 3.7},
            "nftfi": {"contract": {"name": "v2-3.loan.fixed.collection"}},
        })

        assert list(response["errors"]) == ["loan.id"]
        contract_handle.call.assert_not_called()


class TestLoanQueries:
    """Loans.get against the REST API"""

    @pytest.mark.asyncio
    async def test_get_loans(self, api):
        api.get.return_value = {"results": [
            {"id": 1, "terms": {"loan": {"currency": WETH_ADDRESS.upper().replace("0X", "0x")}}},
            {"id": 2, "terms": {"loan": {"currency": "0x" + "9" * 40}}},
        ]}
        loans = Loans(api, Account(address=ACCOUNT_ADDRESS), MAINNET, mock_adapters())

        results = await loans.get({"filters": {"counterparty": "lender", "status": "escrow"}})

        api.get.assert_awaited_once_with(
            uri="v0.1/loans",
            params={"accountAddress": ACCOUNT_ADDRESS, "counterparty": "lender", "status": "escrow"},
        )
        assert results[0]["terms"]["loan"]["unit"] == "ether"
        assert "unit" not in results[1]["terms"]["loan"]

    @pytest.mark.asyncio
    async def test_get_requires_address(self, api):
        loans = Loans(api, Account(), MAINNET, mock_adapters())

        response = await loans.get({"filters": {"status": "escrow"}})

        assert response == {"errors": {"account.address": ["An account address is required for this action"]}}
        api.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_get_rejects_unknown_status(self, api):
        loans = Loans(api, Account(address=ACCOUNT_ADDRESS), MAINNET, mock_adapters())

        response = await loans.get({"filters": {"status": "pending"}})

        assert list(response["errors"]) == ["filters.status"]
        api.get.assert_not_called()

    @pytest.mark.asyncio
    async def test_get_api_failure(self, api):
        api.get.side_effect = ApiError("v0.1/loans returned status 503", status_code=503)
        loans = Loans(api, Account(address=ACCOUNT_ADDRESS), MAINNET, mock_adapters())

        response = await loans.get()

        assert response == {"errors": {"api": ["v0.1/loans returned status 503"]}}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [{"results": None}, {"results": {"id": 1}}, None])
    async def test_get_malformed_body(self, api, body):
        api.get.return_value = body
        loans = Loans(api, Account(address=ACCOUNT_ADDRESS), MAINNET, mock_adapters())

        response = await loans.get()

        assert response == {"errors": {"api": ["v0.1/loans returned a malformed body"]}}
