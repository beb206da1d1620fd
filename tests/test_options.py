import pytest

from oft_sender.core.options import (
    EXECUTOR_WORKER_ID,
    OPTION_TYPE_LZCOMPOSE,
    OPTION_TYPE_LZRECEIVE,
    OPTION_TYPE_NATIVE_DROP,
    OPTION_TYPE_ORDERED_EXECUTION,
    Options,
    build_options,
    decode_compose_option,
    decode_options,
)

from conftest import SIGNER


def _u128(value: int) -> str:
    return value.to_bytes(16, "big").hex()


def test_new_options_is_bare_type3_header():
    assert Options.new_options().to_hex() == "0x0003"
    assert build_options() == "0x0003"


def test_compose_option_matches_reference_layout():
    """index=0, gas=200000, value=0 -> value field omitted, size 19."""
    encoded = Options.new_options().add_executor_compose_option(0, 200_000, 0).to_hex()
    assert encoded == "0x0003" + "01" + "0013" + "03" + "0000" + _u128(200_000)


def test_lz_receive_option_with_value():
    encoded = Options.new_options().add_executor_lz_receive_option(65_000, 5).to_hex()
    assert encoded == "0x0003" + "01" + "0021" + "01" + _u128(65_000) + _u128(5)


def test_options_decode_back_to_entries():
    options = (
        Options.new_options()
        .add_executor_lz_receive_option(80_000)
        .add_executor_native_drop_option(10**15, SIGNER)
        .add_executor_compose_option(1, 200_000, 7)
        .add_executor_ordered_execution_option()
    )
    entries = decode_options(options.to_bytes())

    assert [entry.worker_id for entry in entries] == [EXECUTOR_WORKER_ID] * 4
    assert [entry.option_type for entry in entries] == [
        OPTION_TYPE_LZRECEIVE,
        OPTION_TYPE_NATIVE_DROP,
        OPTION_TYPE_LZCOMPOSE,
        OPTION_TYPE_ORDERED_EXECUTION,
    ]
    assert int.from_bytes(entries[0].data, "big") == 80_000
    assert entries[1].data[16:].endswith(bytes.fromhex(SIGNER[2:]))
    assert decode_compose_option(entries[2].data) == (1, 200_000, 7)
    assert entries[3].data == b""


def test_decode_rejects_other_option_types():
    with pytest.raises(ValueError):
        decode_options("0x0001")


def test_decode_rejects_truncated_payload():
    encoded = build_options(compose_gas=200_000)
    with pytest.raises(ValueError):
        decode_options(encoded[:-2])


def test_gas_must_fit_uint128():
    with pytest.raises(ValueError):
        Options.new_options().add_executor_lz_receive_option(2**128)
    with pytest.raises(TypeError):
        Options.new_options().add_executor_compose_option(0, 200_000.0)
