import pytest

from oft_sender.core.compose import decode_compose_message
from oft_sender.core.options import OPTION_TYPE_LZCOMPOSE, decode_compose_option, decode_options
from oft_sender.core.request import build_basic_request, build_compose_request, build_transfer_request
from oft_sender.core.utils import address_to_bytes32

from conftest import HOP, SIGNER


def test_twenty_token_amount_is_exact_string():
    request = build_transfer_request(recipient=SIGNER, dst_eid=30255, amount=20 * 10**18, min_amount=0)

    assert request.amount_ld == "20000000000000000000"
    assert request.min_amount_ld == "0"


def test_tuple_matches_send_param_layout():
    request = build_transfer_request(
        recipient=SIGNER,
        dst_eid=30255,
        amount="20000000000000000000",
        min_amount="19000000000000000000",
        extra_options="0x0003",
        compose_msg=b"\x01\x02",
    )
    dst_eid, to, amount_ld, min_amount_ld, options, compose_msg, oft_cmd = request.as_tuple()

    assert dst_eid == 30255
    assert to == address_to_bytes32(SIGNER)
    assert amount_ld == 20 * 10**18
    assert min_amount_ld == 19 * 10**18
    assert options == b"\x00\x03"
    assert compose_msg == b"\x01\x02"
    assert oft_cmd == b""


def test_missing_options_default_to_type3_header():
    request = build_transfer_request(recipient=SIGNER, dst_eid=30184, amount=1)
    assert request.extra_options == b"\x00\x03"
    assert request.compose_msg == b""


def test_explicit_empty_options_are_kept():
    request = build_transfer_request(recipient=SIGNER, dst_eid=30184, amount=1, extra_options=b"")
    assert request.extra_options == b""


@pytest.mark.parametrize("dst_eid", [-1, 2**32])
def test_dst_eid_must_fit_uint32(dst_eid):
    with pytest.raises(ValueError):
        build_transfer_request(recipient=SIGNER, dst_eid=dst_eid, amount=1)


def test_float_amounts_are_rejected():
    with pytest.raises(TypeError):
        build_transfer_request(recipient=SIGNER, dst_eid=30255, amount=20 * 10.0**18)


def test_basic_request_sends_directly_to_recipient():
    request = build_basic_request(recipient=SIGNER, dst_eid=30332, amount=5)

    assert request.to == address_to_bytes32(SIGNER)
    assert request.dst_eid == 30332
    assert request.extra_options == b"\x00\x03"
    assert request.compose_msg == b""


def test_compose_request_targets_hop_and_carries_final_leg():
    request = build_compose_request(
        hop_address=HOP,
        hub_eid=30255,
        final_recipient=SIGNER,
        final_dst_eid=30332,
        amount=20 * 10**18,
    )

    assert request.to == address_to_bytes32(HOP)
    assert request.dst_eid == 30255

    (option,) = decode_options(request.extra_options)
    assert option.option_type == OPTION_TYPE_LZCOMPOSE
    assert decode_compose_option(option.data) == (0, 200_000, 0)

    recipient, final_eid = decode_compose_message(request.compose_msg)
    assert recipient == address_to_bytes32(SIGNER)
    assert final_eid == 30332


def test_amount_above_uint256_is_rejected_before_any_remote_call():
    with pytest.raises(ValueError, match="uint256"):
        build_transfer_request(recipient=SIGNER, dst_eid=30255, amount=2**256)
    with pytest.raises(ValueError, match="uint256"):
        build_transfer_request(recipient=SIGNER, dst_eid=30255, amount=1, min_amount=2**256)
