"""In-memory doubles for the web3 surfaces the sender touches."""

import json
from types import SimpleNamespace

import pytest
from web3 import Web3

SIGNER = Web3.to_checksum_address("0x" + "11" * 20)
HOP = Web3.to_checksum_address("0x" + "22" * 20)
OFT = "0x80Eede496655FB9047dd39d9f418d5483ED600df"
TEST_KEY = "0x" + "11" * 32


class FakeCall:
    def __init__(self, functions, name, args):
        self._functions = functions
        self.name = name
        self.args = args

    def call(self):
        self._functions.calls.append((self.name, "call", self.args))
        if self.name == "quoteSend":
            if self._functions.quote_error is not None:
                raise self._functions.quote_error
            return self._functions.quote
        if self.name == "decimalConversionRate":
            return self._functions.conversion_rate
        raise AssertionError(f"unexpected call to {self.name}")

    def estimate_gas(self, params):
        self._functions.calls.append((self.name, "estimate_gas", self.args, params))
        return 150_000

    def build_transaction(self, params):
        self._functions.calls.append((self.name, "build_transaction", self.args, params))
        if self._functions.build_error is not None:
            raise self._functions.build_error
        tx = dict(params)
        tx.update({"to": OFT, "data": "0x", "gas": 150_000})
        return tx


class FakeFunctions:
    def __init__(self, *, quote=(123_456_789, 0), quote_error=None, build_error=None, conversion_rate=10**12):
        self.quote = quote
        self.quote_error = quote_error
        self.build_error = build_error
        self.conversion_rate = conversion_rate
        self.calls = []

    def quoteSend(self, *args):
        return FakeCall(self, "quoteSend", args)

    def send(self, *args):
        return FakeCall(self, "send", args)

    def decimalConversionRate(self):
        return FakeCall(self, "decimalConversionRate", ())

    def names(self):
        return [entry[0] for entry in self.calls]


class FakeContract:
    def __init__(self, **kwargs):
        self.functions = FakeFunctions(**kwargs)


class FakeEth:
    def __init__(self, *, chain_id=8453, receipt_status=1, send_error=None):
        self.chain_id = chain_id
        self.gas_price = 2 * 10**9
        self.max_priority_fee = 10**8
        self.receipt_status = receipt_status
        self.send_error = send_error
        self.raw_sent = []

    def get_transaction_count(self, address):
        return 7

    def send_raw_transaction(self, raw):
        if self.send_error is not None:
            raise self.send_error
        self.raw_sent.append(raw)
        return b"\xab" * 32

    def wait_for_transaction_receipt(self, tx_hash):
        return {"status": self.receipt_status, "blockNumber": 100, "gasUsed": 140_000}


class FakeWeb3:
    def __init__(self, *, connected=True, **eth_kwargs):
        self.connected = connected
        self.eth = FakeEth(**eth_kwargs)

    def is_connected(self):
        return self.connected


class FakeAccount:
    def __init__(self, address=SIGNER, sign_error=None):
        self.address = address
        self.sign_error = sign_error
        self.signed = []

    def sign_transaction(self, tx):
        if self.sign_error is not None:
            raise self.sign_error
        self.signed.append(tx)
        return SimpleNamespace(raw_transaction=b"signed-tx")


@pytest.fixture
def fake_web3():
    return FakeWeb3()


@pytest.fixture
def fake_contract():
    return FakeContract()


@pytest.fixture
def fake_account():
    return FakeAccount()


def base_config_data(**transfer_overrides):
    transfer = {
        "mode": "compose",
        "dst_eid": 30255,
        "amount": "20",
        "min_amount": "0",
        "decimals": 18,
    }
    transfer.update(transfer_overrides)
    return {
        "chain": {"chain_id": 8453, "rpc_url": "https://mainnet.base.org"},
        "contracts": {"oft_address": OFT},
        "transfer": transfer,
        "compose": {"hop_address": HOP, "final_dst_eid": 30332},
    }


@pytest.fixture
def write_config(tmp_path):
    def _write(data):
        path = tmp_path / "config.json"
        path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
        return path

    return _write
