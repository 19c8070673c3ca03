"""CLI entry point for defi-trust-engine.

Invoked as::

    trust-engine [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m trust_engine.cli.main

Commands
--------
version              Show version information
score opportunity    Score one yield opportunity from its metrics
score agent          Score an agent's credibility from its sub-scores
score demo           Track and score the sample opportunities
rewards estimate     Estimate the protocol reward tier for on-chain activity
"""
from __future__ import annotations

import json
import logging
import sys
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from trust_engine.scoring.metrics import TGAS

console = Console()

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


# ------------------------------------------------------------------
# Root group
# ------------------------------------------------------------------


@click.group()
@click.version_option(package_name="defi-trust-engine")
@click.option(
    "--log-level",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging verbosity.",
)
@click.option(
    "--policy-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="JSON file overriding the default opportunity scoring policy.",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str, policy_file: Optional[str]) -> None:
    """Trust scoring for DeFi yield opportunities, agents and protocol rewards"""
    logging.basicConfig(level=getattr(logging, log_level.upper()))
    ctx.ensure_object(dict)
    ctx.obj["policy_file"] = policy_file


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from trust_engine import __version__

    console.print(f"[bold]defi-trust-engine[/bold] v{__version__}")


# ------------------------------------------------------------------
# score command group
# ------------------------------------------------------------------


@cli.group(name="score")
def score_group() -> None:
    """Compute opportunity and agent scores."""


# ------------------------------------------------------------------
# score opportunity
# ------------------------------------------------------------------


@score_group.command(name="opportunity")
@click.option("--apy-7d", type=float, default=None, help="7-day APY in percent.")
@click.option("--apy-30d", type=float, default=None, help="30-day APY in percent.")
@click.option("--target-apy", type=float, default=None, help="Target APY in percent.")
@click.option("--success-rate", type=float, default=None, help="Intent success rate (0-100).")
@click.option("--gas-tgas", type=float, default=None, help="Average gas per intent in TGas.")
@click.option("--latency-ms", type=float, default=None, help="Average intent latency in ms.")
@click.option("--total-intents", type=int, default=None, help="Number of intents observed.")
@click.option("--audited/--not-audited", default=False, help="Whether the contract is audited.")
@click.option(
    "--incidents/--no-incidents",
    default=False,
    help="Whether the opportunity has had security incidents.",
)
@click.option("--audit-date", default=None, help="Audit date (YYYY-MM-DD).")
@click.option("--last-incident-date", default=None, help="Last incident date (YYYY-MM-DD).")
@click.option("--json", "as_json", is_flag=True, default=False, help="Emit JSON.")
@click.pass_context
def score_opportunity_command(
    ctx: click.Context,
    apy_7d: Optional[float],
    apy_30d: Optional[float],
    target_apy: Optional[float],
    success_rate: Optional[float],
    gas_tgas: Optional[float],
    latency_ms: Optional[float],
    total_intents: Optional[int],
    audited: bool,
    incidents: bool,
    audit_date: Optional[str],
    last_incident_date: Optional[str],
    as_json: bool,
) -> None:
    """Compute the trust score of a single opportunity.

    Omitted metrics count as not measured and earn no points.
    """
    from trust_engine.scoring import MetricsSnapshot

    scorer = _load_scorer(ctx)
    snapshot = MetricsSnapshot(
        apy_7d=apy_7d,
        apy_30d=apy_30d,
        target_apy=target_apy,
        success_rate_pct=success_rate,
        avg_gas_used=gas_tgas * TGAS if gas_tgas is not None else None,
        avg_latency_ms=latency_ms,
        total_intents=total_intents,
        is_audited=audited,
        has_incidents=incidents,
        audit_date=audit_date,
        last_incident_date=last_incident_date,
    )
    score = scorer.score(snapshot)

    if as_json:
        click.echo(json.dumps(score.to_dict(), indent=2))
        return

    policy = scorer.policy
    table = Table(title="Opportunity Trust Score", show_header=True)
    table.add_column("Component", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Max", justify="right")
    table.add_row("Performance", str(score.breakdown.performance), str(policy.performance_cap))
    table.add_row("Reliability", str(score.breakdown.reliability), str(policy.reliability_cap))
    table.add_row("Safety", str(score.breakdown.safety), str(policy.safety_cap))

    console.print(table)
    display = score.risk_level.display
    style = display.color
    console.print(f"\n  Total:      [bold]{score.total}/{policy.total_cap}[/bold]")
    console.print(
        f"  Risk level: [{style}]{display.emoji} {score.risk_level.label}[/{style}]"
    )
    console.print(f"  {display.description}")


# ------------------------------------------------------------------
# score agent
# ------------------------------------------------------------------


@score_group.command(name="agent")
@click.option("--provenance", type=float, required=True, help="Provenance sub-score (0-100).")
@click.option("--performance", type=float, required=True, help="Performance sub-score (0-100).")
@click.option("--perception", type=float, required=True, help="Perception sub-score (0-100).")
@click.option(
    "--verification",
    type=float,
    default=0.0,
    show_default=True,
    help="Verification sub-score (0-100).",
)
@click.option(
    "--display-tiers",
    is_flag=True,
    default=False,
    help="Report the five-step display tier instead of the assignment tier.",
)
@click.option("--collateral-usd", type=float, default=0.0, help="Posted collateral in USD.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Emit JSON.")
def score_agent_command(
    provenance: float,
    performance: float,
    perception: float,
    verification: float,
    display_tiers: bool,
    collateral_usd: float,
    as_json: bool,
) -> None:
    """Compute the credibility score of an agent."""
    from trust_engine.credibility import AgentCredibilityScorer, max_ltv

    scorer = AgentCredibilityScorer()
    agent_score = scorer.score(
        provenance=provenance,
        performance=performance,
        perception=perception,
        verification=verification,
    )
    tier = agent_score.display_tier if display_tiers else agent_score.tier
    ltv = max_ltv(agent_score, collateral_usd=collateral_usd)

    if as_json:
        data = agent_score.to_dict()
        data["max_ltv"] = ltv
        click.echo(json.dumps(data, indent=2))
        return

    table = Table(title="Agent Credibility Score", show_header=True)
    table.add_column("Dimension", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Weight", justify="right")

    weights = scorer.policy.weights
    for dimension, value in agent_score.sub_scores().items():
        table.add_row(
            dimension.value.capitalize(),
            str(value),
            f"{weights.get(dimension, 0.0):.0%}",
        )

    console.print(table)
    console.print(f"\n  Overall:    [bold]{agent_score.overall}[/bold]")
    console.print(f"  Confidence: {agent_score.confidence}")
    console.print(f"  Tier:       [bold]{tier.label}[/bold]")
    console.print(f"  Max LTV:    {ltv}%")


# ------------------------------------------------------------------
# score demo
# ------------------------------------------------------------------


@score_group.command(name="demo")
@click.option("--json", "as_json", is_flag=True, default=False, help="Emit JSON.")
@click.pass_context
def score_demo_command(ctx: click.Context, as_json: bool) -> None:
    """Track and score the sample opportunities."""
    from trust_engine.tracker import SAMPLE_OPPORTUNITIES, OpportunityScoreTracker

    tracker = OpportunityScoreTracker(scorer=_load_scorer(ctx))
    for sample in SAMPLE_OPPORTUNITIES:
        tracker.update(
            opportunity_id=sample["opportunity_id"],
            name=sample["name"],
            contract_address=sample["contract_address"],
            metrics=sample["metrics"],
            category=sample["category"],
        )
    statistics = tracker.statistics()

    if as_json:
        payload = {
            "opportunities": [
                record.to_dict(include_history=False) for record in tracker.all_records()
            ],
            "statistics": statistics.to_dict(),
        }
        click.echo(json.dumps(payload, indent=2))
        return

    table = Table(title="Sample Opportunities", show_header=True)
    table.add_column("ID", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Category")
    table.add_column("Perf", justify="right")
    table.add_column("Rel", justify="right")
    table.add_column("Safety", justify="right")
    table.add_column("Total", justify="right")
    table.add_column("Risk")

    for record in tracker.all_records():
        score = record.current_score
        display = score.risk_level.display
        style = display.color
        table.add_row(
            str(record.opportunity_id),
            record.name,
            record.category.value,
            str(score.breakdown.performance),
            str(score.breakdown.reliability),
            str(score.breakdown.safety),
            f"[bold]{score.total}[/bold]",
            f"[{style}]{display.emoji} {score.risk_level.label}[/{style}]",
        )

    console.print(table)
    console.print(f"\nAverage score: {statistics.average_score}")
    if statistics.top_performer is not None:
        console.print(f"Top performer: {statistics.top_performer.name}")


# ------------------------------------------------------------------
# rewards command group
# ------------------------------------------------------------------


@cli.group(name="rewards")
def rewards_group() -> None:
    """Protocol rewards estimation."""


@rewards_group.command(name="estimate")
@click.option("--volume", type=float, default=None, help="Transaction volume in USD.")
@click.option("--calls", type=float, default=None, help="Smart contract calls.")
@click.option("--wallets", type=float, default=None, help="Unique wallets.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Emit JSON.")
def rewards_estimate_command(
    volume: Optional[float],
    calls: Optional[float],
    wallets: Optional[float],
    as_json: bool,
) -> None:
    """Estimate the reward tier for a period of on-chain activity.

    With no options the demo activity (15,420 USD, 627 calls, 100 wallets)
    is used.
    """
    from trust_engine.rewards import (
        DEMO_ACTIVITY,
        MAX_ACTIVITY_POINTS,
        ActivityMetrics,
        estimate_reward,
        requirement_gaps,
    )

    if volume is None and calls is None and wallets is None:
        activity = DEMO_ACTIVITY
    else:
        activity = ActivityMetrics(
            transaction_volume_usd=volume,
            smart_contract_calls=calls,
            unique_wallets=wallets,
        )
    estimate = estimate_reward(activity)
    gaps = requirement_gaps(activity)

    if as_json:
        data = estimate.to_dict()
        data["requirements"] = [gap.to_dict() for gap in gaps]
        click.echo(json.dumps(data, indent=2))
        return

    table = Table(title="Protocol Rewards Estimate", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_column("Points", justify="right")
    table.add_column("Target", justify="right")

    for gap in gaps:
        table.add_row(
            gap.metric.replace("_", " ").capitalize(),
            f"{gap.current:,.0f}",
            str(estimate.breakdown[gap.metric]),
            f"{gap.target:,.0f}",
        )

    console.print(table)
    console.print(f"\n  Points: [bold]{estimate.points}/{MAX_ACTIVITY_POINTS}[/bold]")
    console.print(f"  Tier:   [bold]{estimate.tier.label}[/bold]")
    console.print(f"  Reward: [green]${estimate.reward_usd:,}[/green]")
    for gap in gaps:
        if not gap.met:
            console.print(
                f"  [yellow]Need {gap.shortfall:,.0f} more[/yellow] {gap.metric.replace('_', ' ')}"
            )


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------


def _load_scorer(ctx: click.Context):  # type: ignore[no-untyped-def]
    """Return an OpportunityScorer, using --policy-file when given."""
    from trust_engine.scoring import OpportunityScorer, ScoringPolicy

    policy_file = (ctx.obj or {}).get("policy_file")
    if not policy_file:
        return OpportunityScorer()
    try:
        return OpportunityScorer(ScoringPolicy.from_json_file(policy_file))
    except (OSError, ValueError) as exc:
        console.print(
            f"[red]Error:[/red] invalid policy file {escape(policy_file)}: {escape(str(exc))}"
        )
        sys.exit(1)


if __name__ == "__main__":
    cli()
