"""Rule-table, placeholder, and traceability tests for the message builder."""

import inspect
import unittest
from datetime import datetime, timezone

from signature_registry.models import MappingDescriptor, MatchType
from signature_registry.registry import default_registry
from translation_engine.builder import DEFAULT_RULES, MessageBuilder
from translation_engine.errors import (
    MissingRequiredFieldError,
    NoBuilderError,
    UnresolvedSelectorError,
    UnsupportedPatternError,
)
from translation_engine.messages import subaccount_id
from translation_engine.models import DecodedCall, TranslationContext

USDT = "0xdAC17F958D2ee523a2206206994597C13D831ec7"
WETH = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"
FIXED_NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _call(name: str, *params) -> DecodedCall:
    entry = default_registry().selectors.by_name(name)
    return DecodedCall(
        selector=entry.selector,
        parameters=tuple(params),
        resolved=True,
        function_name=entry.name,
        signature=entry.canonical_signature,
        category=entry.category,
    )


class MessageBuilderTests(unittest.TestCase):
    def setUp(self) -> None:
        self.registry = default_registry()
        self.builder = MessageBuilder(self.registry, time_provider=lambda: FIXED_NOW)

    def _build(self, call: DecodedCall, context: TranslationContext):
        mapping = self.registry.selectors.get(call.selector).mapping
        return self.builder.build(call, mapping, context)

    def test_every_supported_function_has_a_rule(self) -> None:
        self.assertEqual(self.builder.uncovered_functions(), ())

    def test_transfer_copies_amount_and_actors(self) -> None:
        result = self._build(
            _call("transfer", ("amount", "1000000000")),
            TranslationContext(sender_address="A", recipient_address="B"),
        )
        self.assertEqual(len(result.messages), 1)
        message = result.messages[0]
        self.assertEqual(message["@type"], "/cosmos.bank.v1beta1.MsgSend")
        self.assertEqual(message["from_address"], "A")
        self.assertEqual(message["to_address"], "B")
        self.assertEqual(message["amount"], [{"denom": "inj", "amount": "1000000000"}])
        self.assertEqual(result.match_type, MatchType.DIRECT)
        self.assertEqual(result.confidence, 0.98)
        self.assertEqual(result.warnings, ())
        self.assertEqual(result.source_signature, "transfer(address,uint256)")
        self.assertEqual(result.selector, "0xa9059cbb")

    def test_context_overrides_decoded_parameter(self) -> None:
        result = self._build(
            _call("transfer", ("to", "inj1param"), ("amount", "7")),
            TranslationContext(sender_address="A", recipient_address="inj1context", denom="peggy0xabc"),
        )
        self.assertEqual(result.messages[0]["to_address"], "inj1context")
        self.assertEqual(result.messages[0]["amount"][0]["denom"], "peggy0xabc")

        fallback = self._build(
            _call("transfer", ("to", "inj1param"), ("amount", "7")),
            TranslationContext(sender_address="A"),
        )
        self.assertEqual(fallback.messages[0]["to_address"], "inj1param")

    def test_approve_propagates_semantic_notes(self) -> None:
        result = self._build(
            _call("approve", ("spender", "inj1spend"), ("amount", "50")),
            TranslationContext(sender_address="A"),
        )
        grant = result.messages[0]
        self.assertEqual(grant["granter"], "A")
        self.assertEqual(grant["grantee"], "inj1spend")
        self.assertEqual(grant["grant"]["expiration"], "2024-12-31T00:00:00Z")
        self.assertEqual(grant["grant"]["authorization"]["spend_limit"], [{"denom": "inj", "amount": "50"}])
        self.assertEqual(result.match_type, MatchType.SEMANTIC)
        self.assertEqual(result.warnings, ("Injective uses authz module instead of per-token approvals",))

    def test_transfer_from_uses_owner_parameter(self) -> None:
        result = self._build(
            _call("transferFrom", ("from", "inj1owner"), ("to", "inj1to"), ("amount", "3")),
            TranslationContext(sender_address="inj1spender"),
        )
        self.assertEqual(result.messages[0]["from_address"], "inj1owner")
        self.assertEqual(result.messages[0]["to_address"], "inj1to")

    def test_composite_swap_emits_deposit_then_order(self) -> None:
        result = self._build(
            _call("swapExactETHForTokens", ("amountOutMin", "1"), ("path", f"{WETH},{USDT}")),
            TranslationContext(sender_address="inj1abc", eth_value="250"),
        )
        types = [message["@type"] for message in result.messages]
        self.assertEqual(
            types,
            [
                "/injective.exchange.v1beta1.MsgDeposit",
                "/injective.exchange.v1beta1.MsgCreateSpotMarketOrder",
            ],
        )
        self.assertEqual(result.messages[0]["amount"]["amount"], "250")
        order = result.messages[1]["order"]
        self.assertEqual(order["order_info"]["quantity"], "250")
        self.assertEqual(order["order_type"], 2)
        weth_market = self.registry.markets.get("WETH-USDT")
        self.assertEqual(order["market_id"], weth_market.market_id)
        self.assertEqual(result.match_type, MatchType.COMPOSITE)

    def test_swap_market_from_context(self) -> None:
        result = self._build(
            _call("swapExactTokensForTokens", ("amountIn", "100")),
            TranslationContext(sender_address="inj1abc", market_id="0xmarket"),
        )
        order = result.messages[0]["order"]
        self.assertEqual(order["market_id"], "0xmarket")
        self.assertEqual(order["order_info"]["quantity"], "100")
        self.assertEqual(order["order_info"]["subaccount_id"], subaccount_id("inj1abc"))

    def test_staking_rules(self) -> None:
        context = TranslationContext(sender_address="inj1abc", validator_address="injvaloper1xyz")
        delegate = self._build(_call("stake", ("amount", "5000000000")), context)
        undelegate = self._build(_call("withdraw", ("amount", "10")), context)
        reward = self._build(_call("getReward"), context)

        self.assertEqual(delegate.messages[0]["validator_address"], "injvaloper1xyz")
        self.assertEqual(delegate.messages[0]["amount"], {"denom": "inj", "amount": "5000000000"})
        self.assertEqual(delegate.explanation, "Delegate 5000000000 INJ")
        self.assertEqual(undelegate.messages[0]["@type"], "/cosmos.staking.v1beta1.MsgUndelegate")
        self.assertEqual(
            reward.messages[0]["@type"], "/cosmos.distribution.v1beta1.MsgWithdrawDelegatorReward"
        )

    def test_missing_actor_fails_without_placeholders(self) -> None:
        with self.assertRaises(MissingRequiredFieldError) as ctx:
            self._build(_call("stake", ("amount", "5")), TranslationContext(sender_address="A"))
        self.assertEqual(ctx.exception.field, "validator")

        with self.assertRaises(MissingRequiredFieldError):
            self._build(_call("transfer", ("amount", "5")), TranslationContext(recipient_address="B"))

    def test_placeholders_only_when_enabled(self) -> None:
        builder = MessageBuilder(self.registry, allow_placeholders=True, time_provider=lambda: FIXED_NOW)
        call = _call("stake", ("amount", "5"))
        mapping = self.registry.selectors.get(call.selector).mapping
        with self.assertLogs("translation_engine.builder", level="WARNING"):
            result = builder.build(call, mapping, TranslationContext())
        self.assertEqual(result.messages[0]["delegator_address"], "inj1xxx")
        self.assertEqual(result.messages[0]["validator_address"], "injvaloper1xxx")

    def test_unsupported_mapping_produces_no_messages(self) -> None:
        call = _call("flashLoan")
        mapping = self.registry.selectors.get(call.selector).mapping
        with self.assertRaises(UnsupportedPatternError) as ctx:
            self.builder.build(call, mapping, TranslationContext(sender_address="A"))
        self.assertIn("Flash loans", str(ctx.exception))

    def test_unresolved_call_rejected(self) -> None:
        call = DecodedCall(selector="0xdeadbeef", resolved=False)
        with self.assertRaises(UnresolvedSelectorError):
            self.builder.build(call, None, TranslationContext())

    def test_missing_rule_is_reported(self) -> None:
        rules = {name: rule for name, rule in DEFAULT_RULES.items() if name != "stake"}
        builder = MessageBuilder(self.registry, rules=rules)
        self.assertEqual(builder.uncovered_functions(), ("stake",))

        call = _call("stake", ("amount", "5"))
        mapping = MappingDescriptor(MatchType.DIRECT, ("/cosmos.staking.v1beta1.MsgDelegate",), 0.95)
        with self.assertLogs("translation_engine.builder", level="ERROR"):
            with self.assertRaises(NoBuilderError):
                builder.build(call, mapping, TranslationContext(sender_address="A"))

    def test_context_is_not_mutated(self) -> None:
        context = TranslationContext(sender_address="A", recipient_address="B")
        before = repr(context)
        self._build(_call("transfer", ("amount", "1")), context)
        self.assertEqual(repr(context), before)

    def test_rules_have_no_network_dependency(self) -> None:
        source = inspect.getsource(inspect.getmodule(MessageBuilder))
        self.assertNotIn("urllib", source)
        self.assertNotIn("requests", source)


if __name__ == "__main__":
    unittest.main()
