"""Declarative tables backing the shared registry."""

from typing import Tuple

from .models import DenomEntry, MappingDescriptor, MarketEntry, MatchType, Parameter, SignatureEntry

MSG_SEND = "/cosmos.bank.v1beta1.MsgSend"
MSG_GRANT = "/cosmos.authz.v1beta1.MsgGrant"
MSG_DELEGATE = "/cosmos.staking.v1beta1.MsgDelegate"
MSG_UNDELEGATE = "/cosmos.staking.v1beta1.MsgUndelegate"
MSG_WITHDRAW_REWARD = "/cosmos.distribution.v1beta1.MsgWithdrawDelegatorReward"
MSG_SPOT_MARKET_ORDER = "/injective.exchange.v1beta1.MsgCreateSpotMarketOrder"
MSG_DEPOSIT = "/injective.exchange.v1beta1.MsgDeposit"


def _params(*pairs: Tuple[str, str]) -> Tuple[Parameter, ...]:
    return tuple(Parameter(name=name, abi_type=abi_type) for name, abi_type in pairs)


def _unsupported(notes: str) -> MappingDescriptor:
    return MappingDescriptor(
        match_type=MatchType.UNSUPPORTED,
        target_message_types=(),
        confidence=0.0,
        notes=notes,
    )


SIGNATURE_ENTRIES: Tuple[SignatureEntry, ...] = (
    SignatureEntry(
        name="transfer",
        canonical_signature="transfer(address,uint256)",
        parameters=_params(("to", "address"), ("amount", "uint256")),
        category="token",
        mapping=MappingDescriptor(MatchType.DIRECT, (MSG_SEND,), 0.98),
    ),
    SignatureEntry(
        name="approve",
        canonical_signature="approve(address,uint256)",
        parameters=_params(("spender", "address"), ("amount", "uint256")),
        category="token",
        mapping=MappingDescriptor(
            MatchType.SEMANTIC,
            (MSG_GRANT,),
            0.85,
            "Injective uses authz module instead of per-token approvals",
        ),
    ),
    SignatureEntry(
        name="transferFrom",
        canonical_signature="transferFrom(address,address,uint256)",
        parameters=_params(("from", "address"), ("to", "address"), ("amount", "uint256")),
        category="token",
        mapping=MappingDescriptor(
            MatchType.SEMANTIC,
            (MSG_SEND,),
            0.80,
            "Requires authz grant check",
        ),
    ),
    SignatureEntry(
        name="swapExactTokensForTokens",
        canonical_signature="swapExactTokensForTokens(uint256,uint256,address[],address,uint256)",
        parameters=_params(
            ("amountIn", "uint256"),
            ("amountOutMin", "uint256"),
            ("path", "address[]"),
            ("to", "address"),
            ("deadline", "uint256"),
        ),
        category="swap",
        mapping=MappingDescriptor(
            MatchType.SEMANTIC,
            (MSG_SPOT_MARKET_ORDER,),
            0.90,
            "AMM swap converts to orderbook market order",
        ),
    ),
    SignatureEntry(
        name="swapExactETHForTokens",
        canonical_signature="swapExactETHForTokens(uint256,address[],address,uint256)",
        parameters=_params(
            ("amountOutMin", "uint256"),
            ("path", "address[]"),
            ("to", "address"),
            ("deadline", "uint256"),
        ),
        category="swap",
        mapping=MappingDescriptor(
            MatchType.COMPOSITE,
            (MSG_DEPOSIT, MSG_SPOT_MARKET_ORDER),
            0.85,
            "Requires deposit to subaccount first",
        ),
    ),
    SignatureEntry(
        name="swapExactTokensForETH",
        canonical_signature="swapExactTokensForETH(uint256,uint256,address[],address,uint256)",
        parameters=_params(
            ("amountIn", "uint256"),
            ("amountOutMin", "uint256"),
            ("path", "address[]"),
            ("to", "address"),
            ("deadline", "uint256"),
        ),
        category="swap",
        mapping=MappingDescriptor(
            MatchType.SEMANTIC,
            (MSG_SPOT_MARKET_ORDER,),
            0.85,
            "AMM swap converts to orderbook sell order; native unwrap is implicit",
        ),
    ),
    SignatureEntry(
        name="addLiquidity",
        canonical_signature=(
            "addLiquidity(address,address,uint256,uint256,uint256,uint256,address,uint256)"
        ),
        parameters=_params(
            ("tokenA", "address"),
            ("tokenB", "address"),
            ("amountADesired", "uint256"),
            ("amountBDesired", "uint256"),
            ("amountAMin", "uint256"),
            ("amountBMin", "uint256"),
            ("to", "address"),
            ("deadline", "uint256"),
        ),
        category="liquidity",
        mapping=_unsupported("Injective uses orderbook, not AMM. Consider market making."),
    ),
    SignatureEntry(
        name="removeLiquidity",
        canonical_signature=(
            "removeLiquidity(address,address,uint256,uint256,uint256,address,uint256)"
        ),
        parameters=_params(
            ("tokenA", "address"),
            ("tokenB", "address"),
            ("liquidity", "uint256"),
            ("amountAMin", "uint256"),
            ("amountBMin", "uint256"),
            ("to", "address"),
            ("deadline", "uint256"),
        ),
        category="liquidity",
        mapping=_unsupported("Injective uses orderbook, not AMM. Cancel resting orders instead."),
    ),
    SignatureEntry(
        name="stake",
        canonical_signature="stake(uint256)",
        parameters=_params(("amount", "uint256")),
        category="staking",
        mapping=MappingDescriptor(MatchType.DIRECT, (MSG_DELEGATE,), 0.95),
    ),
    SignatureEntry(
        name="withdraw",
        canonical_signature="withdraw(uint256)",
        parameters=_params(("amount", "uint256")),
        category="staking",
        mapping=MappingDescriptor(MatchType.DIRECT, (MSG_UNDELEGATE,), 0.95),
    ),
    SignatureEntry(
        name="getReward",
        canonical_signature="getReward()",
        parameters=(),
        category="staking",
        mapping=MappingDescriptor(MatchType.DIRECT, (MSG_WITHDRAW_REWARD,), 0.95),
    ),
    SignatureEntry(
        name="flashLoan",
        canonical_signature="flashLoan(address,address[],uint256[],uint256[],address,bytes,uint16)",
        parameters=_params(
            ("receiverAddress", "address"),
            ("assets", "address[]"),
            ("amounts", "uint256[]"),
            ("modes", "uint256[]"),
            ("onBehalfOf", "address"),
            ("params", "bytes"),
            ("referralCode", "uint16"),
        ),
        category="flash",
        mapping=_unsupported("Flash loans not supported on Injective"),
    ),
)

MARKET_ENTRIES: Tuple[MarketEntry, ...] = (
    MarketEntry(
        ticker="INJ-USDT",
        market_id="0x0611780ba69656949525013d947713300f56c37b6175e02f26bffa495c3208fe",
        base_denom="inj",
        quote_denom="peggy0xdAC17F958D2ee523a2206206994597C13D831ec7",
    ),
    MarketEntry(
        ticker="WETH-USDT",
        market_id="0xd1956e20d74eeb1febe31cd37060781ff1cb266f49e0512b446a5fafa9a16034",
        base_denom="peggy0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2",
        quote_denom="peggy0xdAC17F958D2ee523a2206206994597C13D831ec7",
    ),
)

DENOM_ENTRIES: Tuple[DenomEntry, ...] = (
    DenomEntry(
        token_address="0xdAC17F958D2ee523a2206206994597C13D831ec7",
        symbol="USDT",
        denom="peggy0xdAC17F958D2ee523a2206206994597C13D831ec7",
    ),
    DenomEntry(
        token_address="0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2",
        symbol="WETH",
        denom="peggy0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2",
    ),
)

DEFAULT_MARKET_TICKER = "INJ-USDT"
