import json
import sys
from pathlib import Path
from typing import Optional

import click

from towersim.alerting.alerts import AlertAgent
from towersim.config import Config
from towersim.orchestrator.sim import Simulation
from towersim.persistence.loader import load_from_directory
from towersim.persistence.saver import save_to_directory
from towersim.utils.errors import MalformedPersistedState


@click.group()
def main() -> None:
	"""Airport control tower simulator CLI."""
	pass


@main.command()
@click.option("--ticks", type=int, default=20, show_default=True)
@click.option("--aircraft", "num_aircraft", type=int, default=8, show_default=True)
@click.option("--gates", type=int, default=3, show_default=True, help="Gates per terminal.")
@click.option("--seed", type=int, default=42, show_default=True)
@click.option("--load", "load_dir", type=click.Path(file_okay=False, path_type=Path), default=None, help="Resume from a save directory.")
@click.option("--save", "save_dir", type=click.Path(file_okay=False, path_type=Path), default=None, help="Write the final state here.")
def simulate(ticks: int, num_aircraft: int, gates: int, seed: int, load_dir: Optional[Path], save_dir: Optional[Path]) -> None:
	"""Advance a tower by a number of ticks and print metrics."""
	cfg = Config(num_aircraft=num_aircraft, gates_per_terminal=gates, seed=seed, num_ticks=ticks)
	tower = None
	if load_dir is not None:
		try:
			tower = load_from_directory(load_dir, cfg)
		except MalformedPersistedState as exc:
			raise click.ClickException(str(exc)) from exc
	sim = Simulation(cfg, tower=tower)
	metrics = sim.run()
	if save_dir is not None:
		save_to_directory(sim.tower, save_dir, cfg)
	res = {
		"ticks_elapsed": sim.tower.ticks_elapsed,
		**metrics.summary(),
		"tower": str(sim.tower),
		"alerts": [
			{"type": a.type, "message": a.message, "meta": a.meta}
			for a in AlertAgent(cfg).generate(sim.tower)
		],
	}
	click.echo(json.dumps(res, indent=2))


@main.command()
@click.argument("save_dir", type=click.Path(file_okay=False, path_type=Path))
def show(save_dir: Path) -> None:
	"""Print the state stored in a save directory."""
	cfg = Config()
	try:
		tower = load_from_directory(save_dir, cfg)
	except MalformedPersistedState as exc:
		raise click.ClickException(str(exc)) from exc
	res = {
		"ticks_elapsed": tower.ticks_elapsed,
		"tower": str(tower),
		"landing_queue": [a.callsign for a in tower.landing_queue.aircraft_in_order()],
		"takeoff_queue": [a.callsign for a in tower.takeoff_queue.aircraft_in_order()],
		"loading": {a.callsign: ticks for a, ticks in tower.loading.items()},
		"gates": {
			f"{type(t).__name__}-{t.terminal_number}": [str(g) for g in t.gates]
			for t in tower.terminals
		},
		"alerts": [a.message for a in AlertAgent(cfg).generate(tower)],
	}
	click.echo(json.dumps(res, indent=2))


@main.command()
@click.argument("save_dir", type=click.Path(file_okay=False, path_type=Path))
def validate(save_dir: Path) -> None:
	"""Check that a save directory can be loaded."""
	try:
		tower = load_from_directory(save_dir, Config())
	except MalformedPersistedState as exc:
		click.echo(f"Malformed save: {exc}", err=True)
		sys.exit(1)
	click.echo(f"OK: {tower}")
