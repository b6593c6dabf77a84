"""
Tests for calldata encoding and event-log decoding.
"""

import pytest

from tokenswap.core.execution.abi import (
    EventParam,
    EventSchema,
    decode_logs,
    encode_call,
    event_topic,
    parse_signature,
    selector,
)
from tokenswap.core.swap.constants import (
    BOUGHT_TOKENS_EVENT,
    DEPOSIT_ETH_SIGNATURE,
    FILL_QUOTE_SIGNATURE,
    ZERO_ADDRESS,
)

CONTRACT = "0x1111111111111111111111111111111111111111"
WETH = "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2"
DAI = "0x6b175474e89094c44da98b954eedeac495271d0f"
TARGET = "0x0000000000001ff3684f28c67538d4d072c22734"


def _word(value: int) -> str:
    return format(value, "064x")


def _address_word(address: str) -> str:
    return address[2:].lower().rjust(64, "0")


def test_erc20_transfer_selector_matches_known_value():
    assert selector("transfer(address,uint256)") == "0xa9059cbb"


def test_parse_signature():
    assert parse_signature("depositETH()") == ("depositETH", [])
    assert parse_signature(FILL_QUOTE_SIGNATURE) == (
        "fillQuote",
        ["address", "address", "address", "address", "bytes"],
    )
    with pytest.raises(ValueError):
        parse_signature("not a signature")


def test_deposit_calldata_is_bare_selector():
    assert encode_call(DEPOSIT_ETH_SIGNATURE) == selector(DEPOSIT_ETH_SIGNATURE)
    assert len(encode_call(DEPOSIT_ETH_SIGNATURE)) == 10


def test_fill_quote_encodes_zero_spender_and_bytes_tail():
    call_data = encode_call(
        FILL_QUOTE_SIGNATURE,
        [WETH, DAI, ZERO_ADDRESS, TARGET, "0x1234"],
    )
    sel = selector(FILL_QUOTE_SIGNATURE)
    assert call_data.startswith(sel)

    words = call_data[len(sel):]
    chunks = [words[i:i + 64] for i in range(0, len(words), 64)]
    assert chunks[0] == _address_word(WETH)
    assert chunks[1] == _address_word(DAI)
    assert chunks[2] == "0" * 64
    assert chunks[3] == _address_word(TARGET)
    assert chunks[4] == _word(5 * 32)  # offset of the bytes argument
    assert chunks[5] == _word(2)       # byte length
    assert chunks[6] == "1234" + "0" * 60
    assert len(chunks) == 7


def test_odd_length_bytes_are_left_padded():
    call_data = encode_call("f(bytes)", ["0xabc"])
    tail = call_data[10 + 64:]
    assert tail[:64] == _word(2)
    assert tail[64:68] == "0abc"


def test_argument_count_mismatch_raises():
    with pytest.raises(ValueError):
        encode_call(FILL_QUOTE_SIGNATURE, [WETH, DAI])


def test_invalid_address_raises():
    with pytest.raises(ValueError):
        encode_call("f(address)", ["0xFILL"])


def _bought_tokens_log(amount: int, address: str = CONTRACT, log_index: str = "0x0"):
    return {
        "address": address,
        "topics": [BOUGHT_TOKENS_EVENT.topic],
        "data": "0x" + _address_word(WETH) + _address_word(DAI) + _word(amount),
        "logIndex": log_index,
    }


def test_bought_tokens_topic_matches_signature():
    assert BOUGHT_TOKENS_EVENT.signature == "BoughtTokens(address,address,uint256)"
    assert BOUGHT_TOKENS_EVENT.topic == event_topic("BoughtTokens(address,address,uint256)")


def test_decode_bought_tokens_log():
    (event,) = decode_logs([_bought_tokens_log(250 * 10**18)], [BOUGHT_TOKENS_EVENT])

    assert event.name == "BoughtTokens"
    assert event.args["boughtAmount"] == 250 * 10**18
    assert event.args["sellToken"].lower() == WETH
    assert event.args["buyToken"].lower() == DAI
    assert event.log_index == 0


def test_decode_logs_filters_by_contract_and_topic():
    transfer_log = {
        "address": WETH,
        "topics": [event_topic("Transfer(address,address,uint256)")],
        "data": "0x" + _word(1),
    }
    foreign = _bought_tokens_log(1, address="0x2222222222222222222222222222222222222222")
    ours = _bought_tokens_log(7, log_index="0x3")

    decoded = decode_logs([transfer_log, foreign, ours], [BOUGHT_TOKENS_EVENT], address=CONTRACT)

    assert len(decoded) == 1
    assert decoded[0].args["boughtAmount"] == 7
    assert decoded[0].log_index == 3


def test_truncated_log_is_skipped():
    log = _bought_tokens_log(1)
    log["data"] = log["data"][:-64]

    assert decode_logs([log], [BOUGHT_TOKENS_EVENT]) == ()


def test_indexed_parameters_come_from_topics():
    schema = EventSchema(
        name="Deposit",
        params=(EventParam("owner", "address", indexed=True), EventParam("amount", "uint256")),
    )
    log = {
        "address": CONTRACT,
        "topics": [schema.topic, "0x" + _address_word(WETH)],
        "data": "0x" + _word(42),
    }

    (event,) = decode_logs([log], [schema])

    assert event.args["owner"].lower() == WETH
    assert event.args["amount"] == 42
