import argparse
import logging
import math
import sys

from .diagnostics import Diagnostics
from .initial_condition_generator import BeltConfig
from .sim_config import SimConfig
from .specialized_generators import SpecializedGenerators

"""
This module is a headless host loop for the simulation. The main function builds the inner solar system scene, initializes circular orbits, steps it for a number of ticks with a fixed dt, and prints energy and momentum diagnostics at a configurable interval, stopping early if the state diverges. It stands in for the render loop, which calls step once per animation frame.

"""


def build_parser() -> argparse.ArgumentParser:
	p = argparse.ArgumentParser(prog="orrery", description="Run the inner solar system headless.")
	p.add_argument("--steps", type=int, default=1000)
	p.add_argument("--dt", type=float, default=0.1)
	p.add_argument("--G", type=float, default=0.001)
	p.add_argument("--seed", type=int, default=None)
	p.add_argument("--asteroids", type=int, default=200)
	p.add_argument("--report-every", type=int, default=100)
	p.add_argument("--verbose", action="store_true")
	return p


def main(argv=None) -> int:
	parser = build_parser()
	args = parser.parse_args(argv)
	if not (math.isfinite(args.dt) and args.dt >= 0.0):
		parser.error(f"--dt must be finite and non-negative, got {args.dt}")
	if not (math.isfinite(args.G) and args.G > 0.0):
		parser.error(f"--G must be positive, got {args.G}")
	if args.steps < 0 or args.asteroids < 0:
		parser.error("--steps and --asteroids must be non-negative")

	logging.basicConfig(
		level=logging.DEBUG if args.verbose else logging.INFO,
		format="%(asctime)s - %(levelname)s - %(module)s - %(message)s",
	)

	cfg = SimConfig(G=args.G, seed=args.seed)
	belt = BeltConfig(count=args.asteroids, seed=args.seed)
	sim = SpecializedGenerators.inner_solar_system(
		cfg, belt=belt, with_belt=args.asteroids > 0
	)
	diag = Diagnostics(sim)

	every = max(1, args.report_every)
	for i in range(1, args.steps + 1):
		sim.step(args.dt)
		if i % every == 0 or i == args.steps:
			s = diag.summary()
			print(f"t={s['time']:.3f} E={s['total_energy']:.6e} "
				  f"K={s['kinetic_energy']:.6e} U={s['potential_energy']:.6e} "
				  f"|L|={s['angular_momentum']:.6e}")
			if s["diverged"]:
				print("[error] simulation diverged")
				return 1
	return 0


if __name__ == "__main__":
	sys.exit(main())
