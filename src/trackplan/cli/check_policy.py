"""CLI check-policy command: validate a policy file."""

import json
from pathlib import Path

import click

from trackplan.cli.helpers import get_config_from_context, load_policy_or_exit


@click.command("check-policy")
@click.argument("policy_path", type=click.Path(path_type=Path))
@click.option("--json", "json_output", is_flag=True, help="Output as JSON.")
@click.pass_context
def check_policy_command(
    ctx: click.Context, policy_path: Path, json_output: bool
) -> None:
    """Validate POLICY_PATH and print its effective settings."""
    config = get_config_from_context(ctx)
    policy = load_policy_or_exit(policy_path, config, json_output)
    capabilities = policy.capabilities
    requirements = policy.ordered_requirements

    if json_output:
        click.echo(
            json.dumps(
                {
                    "status": "completed",
                    "policy": str(policy_path),
                    "supported_formats": list(capabilities.supported_formats),
                    "supported_codecs": list(capabilities.supported_codecs),
                    "output_format": policy.target_format,
                    "requirement_order": policy.requirement_order.value,
                    "requirements": [r.to_dict() for r in requirements],
                },
                indent=2,
            )
        )
        return

    click.echo(f"Policy OK: {policy_path}")
    click.echo(f"  Output format: {policy.target_format}")
    click.echo(f"  Formats: {', '.join(capabilities.supported_formats)}")
    click.echo(f"  Codecs: {', '.join(capabilities.supported_codecs)}")
    click.echo(f"  Requirements ({policy.requirement_order.value} order):")
    for position, requirement in enumerate(requirements, start=1):
        click.echo(f"    {position}. {requirement.description}")
