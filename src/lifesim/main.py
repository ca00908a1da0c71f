"""
Headless runner for the life simulation.
Builds or loads a world, runs it for its cycle count and reports the result.
"""

import argparse
import logging
import sys
from typing import List, Optional, Tuple

from .analysis import plot_history, summarize
from .config import SimulationConfig
from .errors import ConfigurationError, InvalidRequestError
from .simulation import Simulation

AgentRequest = Tuple[str, str, str, Optional[str], Optional[str]]


def parse_agent_spec(text: str) -> AgentRequest:
    """Split SPECIES:NAME:ENERGY[:X:Y] into its fields.

    Raises:
        InvalidRequestError: On the wrong number of fields
    """
    parts = [p.strip() for p in text.split(':')]
    if len(parts) == 3:
        return parts[0], parts[1], parts[2], None, None
    if len(parts) == 5:
        return parts[0], parts[1], parts[2], parts[3], parts[4]
    raise InvalidRequestError(
        f"Expected SPECIES:NAME:ENERGY or SPECIES:NAME:ENERGY:X:Y, got {text!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='lifesim',
        description='Artificial life simulation - foraging life forms on a bounded grid',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Two rabbits and a fox on the default 10x10 world
  lifesim --agent Rabbit:Flopsy:10 --agent Rabbit:Mopsy:10 --agent Fox:Reynard:20

  # Reproducible run with a fixed seed, saving the roster and stats
  lifesim --seed 42 --agent Cow:Daisy:15 --save world.json --stats stats.npz

  # Continue from a saved roster with a bigger world
  lifesim --load world.json --size 20 --food 40 --plot history.png
        """
    )
    parser.add_argument('--load', type=str, default=None,
                        help='Load roster and configuration from a save file')
    parser.add_argument('--cycles', type=int, default=None, help='Number of simulation cycles')
    parser.add_argument('--size', type=int, default=None, help='World size (cells per side)')
    parser.add_argument('--food', type=int, default=None, help='Food density')
    parser.add_argument('--obstacles', type=int, default=None, help='Obstacle density')
    parser.add_argument('--seed', type=int, default=None, help='Random seed')
    parser.add_argument('--agent', action='append', default=[], metavar='SPECIES:NAME:ENERGY[:X:Y]',
                        help='Add a life form (repeatable)')
    parser.add_argument('--save', type=str, default=None,
                        help='Save roster and configuration after the run')
    parser.add_argument('--stats', type=str, default=None, help='Write statistics to a .npz file')
    parser.add_argument('--plot', type=str, default=None, help='Write a history plot to an image file')
    parser.add_argument('--log-interval', type=int, default=10,
                        help='Print progress every N cycles (default: 10)')
    parser.add_argument('--verbose', '-v', action='count', default=0,
                        help='More logging (-v for info, -vv for every move)')
    return parser


def apply_overrides(sim: Simulation, args: argparse.Namespace) -> bool:
    """Copy command line world parameters into the simulation.

    Returns:
        True if the world size changed
    """
    world = sim.config.world
    resized = args.size is not None and args.size != world.world_size
    if args.cycles is not None:
        world.simulation_cycles = args.cycles
    if args.size is not None:
        world.world_size = args.size
    if args.food is not None:
        world.food_density = args.food
    if args.obstacles is not None:
        world.object_density = args.obstacles
    return resized


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for headless runs."""
    args = build_parser().parse_args(argv)

    level = [logging.WARNING, logging.INFO, logging.DEBUG][min(args.verbose, 2)]
    logging.basicConfig(level=level, format='%(levelname)s %(name)s: %(message)s')

    config = SimulationConfig.default()
    config.engine.seed = args.seed
    sim = Simulation(config)

    keep_positions = False
    if args.load:
        keep_positions = sim.load(args.load)
        if not keep_positions:
            print(f"Could not load {args.load}, starting from the default configuration")

    if apply_overrides(sim, args):
        keep_positions = False

    try:
        for spec in args.agent:
            species, name, energy, x, y = parse_agent_spec(spec)
            sim.add_agent(species, name, energy, x, y)
        sim.init_world(place_agents=not keep_positions)
    except InvalidRequestError as e:
        print(f"Invalid life form request: {e}")
        return 2
    except ConfigurationError as e:
        print(f"Invalid configuration: {e}")
        return 2

    if not sim.agents:
        print("No life forms to simulate. Add some with --agent.")
        return 1

    print("=" * 60)
    print("LIFE SIMULATION")
    print("=" * 60)
    print(sim.describe())
    print()

    def report(s: Simulation):
        if s.current_cycle % args.log_interval == 0:
            print(f"Cycle {s.current_cycle:>5}/{s.world.simulation_cycles}: "
                  f"{s.registry.total_population()} life forms, {len(s.food_items)} food items")

    ran = sim.run(on_tick=report)

    print()
    print(f"✓ Ran {ran} cycles")
    for key, value in summarize(sim.stats).items():
        print(f"  {key}: {value}")

    if args.save:
        if sim.save(args.save):
            print(f"✓ Configuration saved to: {args.save}")
        else:
            print(f"✗ Failed to save configuration to: {args.save}")
    if args.stats:
        sim.save_stats(args.stats)
        print(f"✓ Statistics saved to: {args.stats}")
    if args.plot:
        plot_history(sim.stats, output=args.plot)

    return 0


if __name__ == "__main__":
    sys.exit(main())
