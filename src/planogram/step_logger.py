"""
Step logger: console output and structured recording of each request.

Usage:
    logger = StepLogger(verbose=True)
    logger.log_step(record)
    logger.print_summary(session.summary())
"""

from typing import List

from planogram.session import StepRecord


class StepLogger:
    """Logs placement requests to console and stores them for JSON output."""

    def __init__(self, verbose: bool = False) -> None:
        self.verbose = verbose
        self._records: List[dict] = []

    def log_step(self, record: StepRecord) -> None:
        """Log a single drop / move / remove."""
        self._records.append(record.to_dict())

        if not self.verbose:
            return

        if record.result is None:
            print(f"  Step {record.step:3d}: {record.action:<6} {record.uid}  "
                  f"[{record.elapsed_ms:.1f}ms]")
            return

        r = record.result
        landed = (
            f"on {r.support.kind.value} @ {r.support.top_y:.1f}"
            if r.support is not None else "free-floating"
        )
        print(
            f"  Step {record.step:3d}: {record.action:<6} {record.uid} "
            f"({record.requested_x:.1f}, {record.requested_y:.1f}) "
            f"-> unit {r.bin_index} ({r.x:.1f}, {r.y:.1f}) {landed}  "
            f"[{record.elapsed_ms:.1f}ms]"
        )

    def print_summary(self, summary: dict) -> None:
        """Print a formatted session summary block."""
        print("\n" + "=" * 65)
        print("  PLANOGRAM SUMMARY")
        print("=" * 65)
        print(f"  Units:            {summary['units']} "
              f"({summary['total_width']:.0f} x {summary['bin_height']:.0f})")
        print(f"  Items placed:     {summary['items']}")
        print(f"  Items per unit:   {summary['items_per_unit']}")
        print(f"  Requests:         {summary['requests']} "
              f"({summary['snapped']} snapped to a support)")
        print(f"  Layout issues:    {summary['issues']}")
        print(f"  Computation time: {summary['computation_time_ms']:.1f} ms")
        print("=" * 65 + "\n")

    def get_records(self) -> List[dict]:
        """All logged step records as dicts (for JSON output)."""
        return list(self._records)
