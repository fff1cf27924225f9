"""
Planogram runner: replay drop / move / remove requests against a frame.

Usage:
    planogram-run --ops ops.yaml -v
    planogram-run --layout frames/aisle3.yaml --generate 40 --seed 7 --json

An operations file is a YAML list:

    - {op: drop, id: box, product: p5, x: 10, y: 120}
    - {op: drop, id: towel, width: 30, height: 10, x: 12, y: 80}
    - {op: move, id: box, x: 130, y: 40}
    - {op: remove, id: towel}
"""

import argparse
import json
import logging
import random
import sys
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from planogram.catalog import Product, generate_products, get_product
from planogram.core.models import InvalidInput
from planogram.layout import LayoutConfigError, default_layout, load_layout, read_yaml
from planogram.session import Planogram
from planogram.step_logger import StepLogger


# ─────────────────────────────────────────────────────────────────────────────
# Operations
# ─────────────────────────────────────────────────────────────────────────────

class Operation(BaseModel):
    model_config = ConfigDict(extra="forbid")

    op: Literal["drop", "move", "remove"]
    id: Optional[str] = None
    product: Optional[str] = None
    width: Optional[float] = Field(default=None, ge=0)
    height: Optional[float] = Field(default=None, ge=0)
    x: Optional[float] = None
    y: Optional[float] = None

    @model_validator(mode="after")
    def _required_fields(self) -> "Operation":
        if self.op in ("move", "remove") and self.id is None:
            raise ValueError(f"'{self.op}' needs an id")
        if self.op in ("drop", "move") and (self.x is None or self.y is None):
            raise ValueError(f"'{self.op}' needs x and y")
        if self.op == "drop" and self.product is None and (
                self.width is None or self.height is None):
            raise ValueError("'drop' needs a product or width and height")
        if self.product is not None and (self.width is not None or self.height is not None):
            raise ValueError("give either a product or width and height, not both")
        return self


def load_operations(path: str) -> List[Operation]:
    data = read_yaml(path)
    if not isinstance(data, list):
        raise LayoutConfigError(f"{path}: expected a list of operations")
    try:
        return [Operation.model_validate(entry) for entry in data]
    except ValidationError as e:
        raise LayoutConfigError(f"{path}: invalid operation\n{e}") from e


def apply_operation(session: Planogram, operation: Operation) -> None:
    try:
        if operation.op == "drop":
            if operation.product is not None:
                session.drop_product(get_product(operation.product),
                                     operation.x, operation.y, uid=operation.id)
            else:
                session.drop(operation.width, operation.height,
                             operation.x, operation.y, uid=operation.id)
        elif operation.op == "move":
            session.move(operation.id, operation.x, operation.y)
        else:
            session.remove(operation.id)
    except KeyError as e:
        raise LayoutConfigError(f"{operation.op}: unknown product or item {e}") from e
    except InvalidInput as e:
        raise LayoutConfigError(f"{operation.op}: {e}") from e


def random_drops(session: Planogram, products: List[Product], seed: Optional[int]) -> None:
    """Drop each product at a random position inside the frame."""
    rng = random.Random(seed)
    topology = session.topology
    for product in products:
        x = rng.uniform(0.0, max(topology.total_width - product.width, 0.0))
        y = rng.uniform(0.0, max(topology.bin_height - product.height, 0.0))
        session.drop_product(product, x, y)


# ─────────────────────────────────────────────────────────────────────────────
# CLI
# ─────────────────────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="planogram-run",
        description="Planogram placement runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  planogram-run --ops ops.yaml -v
  planogram-run --layout frame.yaml --generate 40 --seed 7 --json
        """,
    )
    parser.add_argument("--layout", type=str, help="Path to layout YAML (default frame if omitted)")

    src = parser.add_mutually_exclusive_group()
    src.add_argument("--ops", type=str, help="Path to operations YAML")
    src.add_argument("--generate", type=int, metavar="N",
                     help="Drop N random products at random positions")
    parser.add_argument("--seed", type=int, default=42)

    parser.add_argument("--json", action="store_true",
                        help="Print final items and summary as JSON")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        layout = load_layout(args.layout) if args.layout else default_layout()
        session = Planogram.from_layout(layout)
        if args.ops:
            for operation in load_operations(args.ops):
                apply_operation(session, operation)
        elif args.generate:
            random_drops(session, generate_products(args.generate, seed=args.seed), args.seed)
    except LayoutConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    step_logger = StepLogger(verbose=args.verbose and not args.json)
    for record in session.get_step_log():
        step_logger.log_step(record)

    summary = session.summary()
    if args.json:
        print(json.dumps({
            "topology": session.topology.to_dict(),
            "items": [item.to_dict() for item in session.items],
            "steps": step_logger.get_records(),
            "issues": [issue.to_dict() for issue in session.audit()],
            "summary": summary,
        }, indent=2))
    else:
        step_logger.print_summary(summary)
    return 0


if __name__ == "__main__":
    sys.exit(main())
