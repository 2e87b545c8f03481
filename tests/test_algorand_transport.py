"""Test Algorand transport.

The AtomicTransactionComposer is patched, so no Algorand node is needed.
"""

from __future__ import annotations

from unittest.mock import Mock, patch

import pytest
from algosdk.atomic_transaction_composer import AccountTransactionSigner, EmptySigner
from algosdk.error import AlgodHTTPError
from algosdk.logic import get_application_address

from seraphid.sdk.algorand import OPERATION_SIGNATURES, AlgorandTransport, application_did
from seraphid.sdk.chain import IssuerOperation, RootOfTrustOperation
from seraphid.sdk.errors import TransportError
from seraphid.sdk.issuer import IssuerContract
from seraphid.sdk.models import DIDNetwork

APP_ID = 1001


@pytest.fixture
def algod() -> Mock:
    client = Mock()
    client.suggested_params.return_value = Mock()
    return client


@pytest.fixture
def transport(algod: Mock) -> AlgorandTransport:
    return AlgorandTransport(algod, [APP_ID])


def _simulate_response(return_value=None, failure_message=""):
    abi_result = Mock(decode_error=None, return_value=return_value, raw_value=b"")
    return Mock(failure_message=failure_message, failed_at=None, abi_results=[abi_result])


def test_every_operation_has_signature() -> None:
    """Test every contract operation maps to an ABI method."""
    for operation in IssuerOperation:
        assert operation.value in OPERATION_SIGNATURES
    for operation in RootOfTrustOperation:
        assert operation.value in OPERATION_SIGNATURES


@patch("seraphid.sdk.algorand.AtomicTransactionComposer")
def test_query_simulates_call(mock_atc_cls: Mock, transport: AlgorandTransport, algod: Mock) -> None:
    """Test reads are simulated with an empty signer from the app address."""
    atc = mock_atc_cls.return_value
    atc.simulate.return_value = _simulate_response(return_value=True)
    address = get_application_address(APP_ID)

    result = transport.query(address, "isValidClaim", ["C1"])

    assert result is True
    kwargs = atc.add_method_call.call_args.kwargs
    assert kwargs["app_id"] == APP_ID
    assert kwargs["sender"] == address
    assert kwargs["method_args"] == ["C1"]
    assert kwargs["method"].get_signature() == "isValidClaim(string)bool"
    assert isinstance(kwargs["signer"], EmptySigner)
    request = atc.simulate.call_args.args[1]
    assert request.allow_empty_signatures is True
    atc.execute.assert_not_called()


@patch("seraphid.sdk.algorand.AtomicTransactionComposer")
def test_query_failure_message(mock_atc_cls: Mock, transport: AlgorandTransport) -> None:
    """Test failed contract execution raises TransportError."""
    mock_atc_cls.return_value.simulate.return_value = _simulate_response(failure_message="logic eval error")

    with pytest.raises(TransportError, match="logic eval error"):
        transport.query(get_application_address(APP_ID), "getSchemaDetails", ["KYC"])


@patch("seraphid.sdk.algorand.AtomicTransactionComposer")
def test_query_http_error(mock_atc_cls: Mock, transport: AlgorandTransport) -> None:
    mock_atc_cls.return_value.simulate.side_effect = AlgodHTTPError("node down", 503)

    with pytest.raises(TransportError, match="node down"):
        transport.query(get_application_address(APP_ID), "name")


@patch("seraphid.sdk.algorand.AtomicTransactionComposer")
def test_query_decode_error(mock_atc_cls: Mock, transport: AlgorandTransport) -> None:
    response = _simulate_response()
    response.abi_results[0].decode_error = ValueError("bad bytes")
    mock_atc_cls.return_value.simulate.return_value = response

    with pytest.raises(TransportError, match="Could not decode name result"):
        transport.query(get_application_address(APP_ID), "name")


def test_invoke_requires_signer(transport: AlgorandTransport) -> None:
    with pytest.raises(ValueError, match="Signer not set"):
        transport.invoke(get_application_address(APP_ID), "injectClaim", ["C1"])


@patch("seraphid.sdk.algorand.AtomicTransactionComposer")
def test_invoke_returns_tx_id(mock_atc_cls: Mock, transport: AlgorandTransport) -> None:
    """Test writes are executed with the configured signer and sender."""
    signer = AccountTransactionSigner("dummy_key")
    transport.set_signer(signer, "SENDER")
    atc = mock_atc_cls.return_value
    atc.execute.return_value = Mock(tx_ids=["TX123"])

    tx = transport.invoke(get_application_address(APP_ID), "registerIssuer", ["ADDR", "KYC"])

    assert tx == "TX123"
    kwargs = atc.add_method_call.call_args.kwargs
    assert kwargs["signer"] is signer
    assert kwargs["sender"] == "SENDER"
    assert kwargs["method_args"] == ["ADDR", "KYC"]
    atc.execute.assert_called_once_with(transport.algod_client, 4)


@patch("seraphid.sdk.algorand.AtomicTransactionComposer")
def test_invoke_http_error(mock_atc_cls: Mock, transport: AlgorandTransport) -> None:
    transport.set_signer(AccountTransactionSigner("dummy_key"), "SENDER")
    mock_atc_cls.return_value.execute.side_effect = AlgodHTTPError("rejected", 400)

    with pytest.raises(TransportError, match="rejected"):
        transport.invoke(get_application_address(APP_ID), "revokeClaim", ["C1"])


def test_unknown_contract(transport: AlgorandTransport) -> None:
    with pytest.raises(TransportError, match="Unknown contract"):
        transport.query(get_application_address(APP_ID + 1), "name")


def test_unsupported_operation(transport: AlgorandTransport) -> None:
    with pytest.raises(ValueError, match="Unsupported operation"):
        transport.query(get_application_address(APP_ID), "recoverClaim")


def test_register_app(algod: Mock) -> None:
    transport = AlgorandTransport(algod)

    assert transport.register_app(APP_ID) == get_application_address(APP_ID)
    assert transport.app_id_for(get_application_address(APP_ID)) == APP_ID
    with pytest.raises(ValueError, match="App ID must be positive"):
        transport.register_app(0)


def test_transport_requires_client() -> None:
    with pytest.raises(ValueError, match="Algod client is required"):
        AlgorandTransport(None)


def test_application_did() -> None:
    """Test application DIDs use the application address."""
    assert application_did(DIDNetwork.MAIN, APP_ID) == f"did:seraph:main:{get_application_address(APP_ID)}"


@patch("seraphid.sdk.algorand.AtomicTransactionComposer")
def test_issuer_contract_over_transport(mock_atc_cls: Mock, transport: AlgorandTransport) -> None:
    """Test Issuer contract reads decode through the transport."""
    mock_atc_cls.return_value.simulate.return_value = _simulate_response(return_value=["ab" * 32])
    contract = IssuerContract(get_application_address(APP_ID), DIDNetwork.PRIVATE, transport, transport)

    assert contract.get_issuer_public_keys() == ["ab" * 32]
    method = mock_atc_cls.return_value.add_method_call.call_args.kwargs["method"]
    assert method.get_signature() == "getAdminList()string[]"
