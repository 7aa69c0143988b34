"""Constructors for Cosmos SDK / Injective JSON messages."""

from typing import Dict

from signature_registry.tables import (
    MSG_DELEGATE,
    MSG_DEPOSIT,
    MSG_GRANT,
    MSG_SEND,
    MSG_SPOT_MARKET_ORDER,
    MSG_UNDELEGATE,
    MSG_WITHDRAW_REWARD,
)

SEND_AUTHORIZATION = "/cosmos.bank.v1beta1.SendAuthorization"
NATIVE_DENOM = "inj"

ORDER_TYPE_BUY = 1
ORDER_TYPE_SELL = 2


def subaccount_id(address: str) -> str:
    """Default subaccount id: address body left-padded to 20 bytes plus nonce 0."""

    return "0x" + address.replace("inj", "").rjust(40, "0") + "0" * 24


def msg_send(from_address: str, to_address: str, amount: str, denom: str = NATIVE_DENOM) -> Dict[str, object]:
    return {
        "@type": MSG_SEND,
        "from_address": from_address,
        "to_address": to_address,
        "amount": [{"denom": denom, "amount": amount}],
    }


def msg_grant(
    granter: str, grantee: str, amount: str, expiration: str, denom: str = NATIVE_DENOM
) -> Dict[str, object]:
    return {
        "@type": MSG_GRANT,
        "granter": granter,
        "grantee": grantee,
        "grant": {
            "authorization": {
                "@type": SEND_AUTHORIZATION,
                "spend_limit": [{"denom": denom, "amount": amount}],
            },
            "expiration": expiration,
        },
    }


def msg_delegate(delegator: str, validator: str, amount: str) -> Dict[str, object]:
    return {
        "@type": MSG_DELEGATE,
        "delegator_address": delegator,
        "validator_address": validator,
        "amount": {"denom": NATIVE_DENOM, "amount": amount},
    }


def msg_undelegate(delegator: str, validator: str, amount: str) -> Dict[str, object]:
    return {
        "@type": MSG_UNDELEGATE,
        "delegator_address": delegator,
        "validator_address": validator,
        "amount": {"denom": NATIVE_DENOM, "amount": amount},
    }


def msg_withdraw_reward(delegator: str, validator: str) -> Dict[str, object]:
    return {
        "@type": MSG_WITHDRAW_REWARD,
        "delegator_address": delegator,
        "validator_address": validator,
    }


def msg_spot_market_order(sender: str, market_id: str, quantity: str, order_type: int) -> Dict[str, object]:
    return {
        "@type": MSG_SPOT_MARKET_ORDER,
        "sender": sender,
        "order": {
            "market_id": market_id,
            "order_info": {
                "subaccount_id": subaccount_id(sender),
                "fee_recipient": sender,
                "price": "0",
                "quantity": quantity,
            },
            "order_type": order_type,
            "trigger_price": "0",
        },
    }


def msg_deposit(sender: str, amount: str, denom: str = NATIVE_DENOM) -> Dict[str, object]:
    return {
        "@type": MSG_DEPOSIT,
        "sender": sender,
        "subaccount_id": subaccount_id(sender),
        "amount": {"denom": denom, "amount": amount},
    }
