"""CLI for inspecting how effect text is parsed."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict

import click

from jukudeck.cards.describe import describe_condition, describe_delta, describe_effect
from jukudeck.cards.effects import EffectAST, RoleCondition, SetTo, StatCondition, StatDelta
from jukudeck.cards.parser import parse_effect
from jukudeck.cards.schema import ROLE_ORDER

logger = logging.getLogger(__name__)


def _delta_to_dict(delta: StatDelta) -> Dict[str, Any]:
    if isinstance(delta, SetTo):
        return {"type": "set", "stat": delta.stat.value, "value": delta.value}
    return {"type": "change", "stat": delta.stat.value, "delta": delta.delta}


def ast_to_dict(ast: EffectAST) -> Dict[str, Any]:
    """JSON-friendly view of a parsed effect."""
    blocks = []
    for block in ast.conditional_blocks:
        cond = block.condition
        if isinstance(cond, RoleCondition):
            cond_dict: Dict[str, Any] = {
                "type": "role",
                "roles": [r.value for r in ROLE_ORDER if r in cond.roles],
            }
        elif isinstance(cond, StatCondition):
            cond_dict = {
                "type": "stat",
                "stat": cond.stat.value,
                "threshold": cond.threshold,
                "comparator": cond.comparator.value,
            }
        else:
            cond_dict = {"type": "unknown", "raw": describe_condition(cond)}
        blocks.append({"condition": cond_dict, "effects": [_delta_to_dict(d) for d in block.effects]})

    return {
        "role_restrictions": [r.value for r in ROLE_ORDER if r in ast.role_restrictions],
        "base_effects": [_delta_to_dict(d) for d in ast.base_effects],
        "conditional_blocks": blocks,
    }


@click.command()
@click.argument("texts", nargs=-1, required=True)
@click.option("--json", "as_json", is_flag=True, help="Print the parsed AST as JSON")
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(texts: tuple[str, ...], as_json: bool, verbose: bool):
    """Parse card effect TEXTS and show what the engine understands."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)

    for text in texts:
        ast = parse_effect(text)
        if as_json:
            click.echo(json.dumps({"text": text, "ast": ast_to_dict(ast)}, ensure_ascii=False))
            continue

        click.echo(text)
        click.echo(f"  summary: {describe_effect(ast)}")
        if ast.role_restrictions:
            roles = ", ".join(r.value for r in ROLE_ORDER if r in ast.role_restrictions)
            click.echo(f"  restricted to: {roles}")
        for delta in ast.base_effects:
            click.echo(f"  base: {describe_delta(delta)}")
        for block in ast.conditional_blocks:
            effects = ", ".join(describe_delta(d) for d in block.effects) or "(none)"
            click.echo(f"  if {describe_condition(block.condition)}: {effects}")


if __name__ == "__main__":
    main()
