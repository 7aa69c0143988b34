"""Build Cosmos messages from decoded EVM calls via a per-function rule table."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
import logging
from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional, Tuple

from signature_registry.models import MappingDescriptor, MarketEntry
from signature_registry.registry import SignatureRegistry, default_registry

from . import messages
from .errors import (
    MissingRequiredFieldError,
    NoBuilderError,
    UnresolvedSelectorError,
    UnsupportedPatternError,
)
from .models import DecodedCall, TranslationContext, TranslationResult

logger = logging.getLogger(__name__)

GRANT_LIFETIME = timedelta(days=365)


@dataclass(frozen=True)
class Role:
    """Where a message field comes from, in priority order."""

    field: str
    context_attr: Optional[str]
    param_names: Tuple[str, ...]
    placeholder: str


SENDER = Role("sender", "sender_address", (), "inj1xxx")
RECIPIENT = Role("recipient", "recipient_address", ("to",), "inj1recipient")
SPENDER = Role("spender", "spender_address", ("spender",), "inj1spender")
OWNER = Role("owner", "owner_address", ("from",), "inj1xxx")
VALIDATOR = Role("validator", "validator_address", ("validator",), "injvaloper1xxx")
AMOUNT = Role("amount", None, ("amount",), "0")
AMOUNT_IN = Role("amountIn", None, ("amountIn",), "0")
ETH_VALUE = Role("ethValue", "eth_value", (), "0")


@dataclass(frozen=True)
class RuleInputs:
    call: DecodedCall
    context: TranslationContext
    registry: SignatureRegistry
    allow_placeholders: bool
    now: datetime

    @property
    def function_name(self) -> str:
        return self.call.function_name or self.call.selector

    def lookup(self, role: Role) -> Optional[str]:
        if role.context_attr:
            value = getattr(self.context, role.context_attr)
            if value:
                return value
        for name in role.param_names:
            value = self.call.parameter(name)
            if value:
                return value
        return None

    def require(self, role: Role) -> str:
        value = self.lookup(role)
        if value is not None:
            return value
        return self.placeholder(role.field, role.placeholder)

    def placeholder(self, field: str, value: str) -> str:
        if not self.allow_placeholders:
            raise MissingRequiredFieldError(field, self.function_name)
        logger.warning("%s: substituting placeholder for '%s'", self.function_name, field)
        return value

    @property
    def denom(self) -> str:
        return self.context.denom or messages.NATIVE_DENOM

    def market_id(self) -> str:
        if self.context.market_id:
            return self.context.market_id
        market = self._market_from_path()
        if market is not None:
            return market.market_id
        default_market = self.registry.default_market
        return self.placeholder("market_id", default_market.market_id if default_market else "0x000")

    def _market_from_path(self) -> Optional[MarketEntry]:
        path = self.call.parameter("path")
        if not path:
            return None
        tokens = [token for token in path.split(",") if token]
        if len(tokens) < 2:
            return None
        first = self.registry.denom_for_token(tokens[0])
        last = self.registry.denom_for_token(tokens[-1])
        if first is None or last is None:
            return None
        return self.registry.market_for_denoms(first.denom, last.denom)


Rule = Callable[[RuleInputs], Tuple[Tuple[Dict[str, object], ...], str]]


def _transfer(inputs: RuleInputs):
    amount = inputs.require(AMOUNT)
    message = messages.msg_send(
        from_address=inputs.require(SENDER),
        to_address=inputs.require(RECIPIENT),
        amount=amount,
        denom=inputs.denom,
    )
    return (message,), f"Transfer {amount} tokens"


def _approve(inputs: RuleInputs):
    expiration = (inputs.now + GRANT_LIFETIME).strftime("%Y-%m-%dT%H:%M:%SZ")
    message = messages.msg_grant(
        granter=inputs.require(SENDER),
        grantee=inputs.require(SPENDER),
        amount=inputs.require(AMOUNT),
        expiration=expiration,
        denom=inputs.denom,
    )
    return (message,), "Grant spending authorization"


def _transfer_from(inputs: RuleInputs):
    owner = inputs.lookup(OWNER) or inputs.require(SENDER)
    message = messages.msg_send(
        from_address=owner,
        to_address=inputs.require(RECIPIENT),
        amount=inputs.require(AMOUNT),
        denom=inputs.denom,
    )
    return (message,), "Transfer from authorized account"


def _swap_tokens_for_tokens(inputs: RuleInputs):
    message = messages.msg_spot_market_order(
        sender=inputs.require(SENDER),
        market_id=inputs.market_id(),
        quantity=inputs.require(AMOUNT_IN),
        order_type=messages.ORDER_TYPE_BUY,
    )
    return (message,), "Swap via spot market order"


def _swap_eth_for_tokens(inputs: RuleInputs):
    sender = inputs.require(SENDER)
    value = inputs.require(ETH_VALUE)
    deposit = messages.msg_deposit(sender=sender, amount=value)
    order = messages.msg_spot_market_order(
        sender=sender,
        market_id=inputs.market_id(),
        quantity=value,
        order_type=messages.ORDER_TYPE_SELL,
    )
    return (deposit, order), "Deposit then swap (2-step)"


def _swap_tokens_for_eth(inputs: RuleInputs):
    message = messages.msg_spot_market_order(
        sender=inputs.require(SENDER),
        market_id=inputs.market_id(),
        quantity=inputs.require(AMOUNT_IN),
        order_type=messages.ORDER_TYPE_SELL,
    )
    return (message,), "Sell via spot market order"


def _stake(inputs: RuleInputs):
    amount = inputs.require(AMOUNT)
    message = messages.msg_delegate(
        delegator=inputs.require(SENDER),
        validator=inputs.require(VALIDATOR),
        amount=amount,
    )
    return (message,), f"Delegate {amount} INJ"


def _withdraw(inputs: RuleInputs):
    amount = inputs.require(AMOUNT)
    message = messages.msg_undelegate(
        delegator=inputs.require(SENDER),
        validator=inputs.require(VALIDATOR),
        amount=amount,
    )
    return (message,), f"Undelegate {amount} INJ"


def _get_reward(inputs: RuleInputs):
    message = messages.msg_withdraw_reward(
        delegator=inputs.require(SENDER),
        validator=inputs.require(VALIDATOR),
    )
    return (message,), "Claim staking rewards"


DEFAULT_RULES: Mapping[str, Rule] = MappingProxyType(
    {
        "transfer": _transfer,
        "approve": _approve,
        "transferFrom": _transfer_from,
        "swapExactTokensForTokens": _swap_tokens_for_tokens,
        "swapExactETHForTokens": _swap_eth_for_tokens,
        "swapExactTokensForETH": _swap_tokens_for_eth,
        "stake": _stake,
        "withdraw": _withdraw,
        "getReward": _get_reward,
    }
)


class MessageBuilder:
    """Applies the construction rule registered for a call's function name."""

    def __init__(
        self,
        registry: Optional[SignatureRegistry] = None,
        rules: Optional[Mapping[str, Rule]] = None,
        allow_placeholders: bool = False,
        time_provider: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._registry = registry or default_registry()
        self._rules = MappingProxyType(dict(DEFAULT_RULES if rules is None else rules))
        self._allow_placeholders = allow_placeholders
        self._time_provider = time_provider or _utc_now

    @property
    def allow_placeholders(self) -> bool:
        return self._allow_placeholders

    def build(
        self,
        call: DecodedCall,
        mapping: Optional[MappingDescriptor],
        context: Optional[TranslationContext] = None,
    ) -> TranslationResult:
        if mapping is None:
            raise UnresolvedSelectorError(f"Unknown selector {call.selector}", decoded_call=call)
        if not mapping.supported:
            raise UnsupportedPatternError(mapping.notes or f"{call.signature} is not supported.")

        rule = self._rules.get(call.function_name or "")
        if rule is None:
            logger.error(
                "Registry entry %s has a %s mapping but no construction rule",
                call.signature,
                mapping.match_type.value,
            )
            raise NoBuilderError(f"No builder for {call.function_name}")

        inputs = RuleInputs(
            call=call,
            context=context or TranslationContext(),
            registry=self._registry,
            allow_placeholders=self._allow_placeholders,
            now=self._time_provider(),
        )
        built, explanation = rule(inputs)
        return TranslationResult(
            messages=tuple(built),
            explanation=explanation,
            confidence=mapping.confidence,
            match_type=mapping.match_type,
            warnings=(mapping.notes,) if mapping.notes else (),
            source_signature=call.signature or "",
            selector=call.selector,
        )

    def uncovered_functions(self) -> Tuple[str, ...]:
        """Supported registry functions without a rule; should always be empty."""

        return tuple(
            entry.name
            for entry in self._registry.selectors.values()
            if entry.mapping.supported and entry.name not in self._rules
        )


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)
