import argparse
import logging

from foxesrabbits.config import build_config
from foxesrabbits.game import run_simulation

logger = logging.getLogger("foxesrabbits")


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Fox and rabbit gridworld ecosystem")
    parser.add_argument("--days", type=int, default=200, help="maximum number of days to simulate")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--rows", type=int, default=None)
    parser.add_argument("--columns", type=int, default=None)
    parser.add_argument("--speed", choices=["slow", "normal", "fast"], default=None)
    parser.add_argument("--config", type=str, default=None, help="JSON config file")
    parser.add_argument("--log-every", type=int, default=10)
    parser.add_argument("--render", action="store_true", help="open the pygame viewer")
    parser.add_argument("--cell-size", type=int, default=48)
    parser.add_argument("--plot", type=str, default=None, help="write the energy history chart to this path")
    parser.add_argument("--log-level", type=str, default="INFO")
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    overrides = {
        key: value
        for key, value in (("seed", args.seed), ("rows", args.rows), ("columns", args.columns), ("speed", args.speed))
        if value is not None
    }
    cfg = build_config(args.config, overrides)
    logger.info("Config: %s", cfg.to_dict())

    renderer = None
    if args.render:
        try:
            from foxesrabbits.pygame_renderer import PyGameRenderer
        except Exception as exc:
            raise RuntimeError("pygame is required for rendering") from exc
        renderer = PyGameRenderer(cfg.columns, cfg.rows, cell_size=args.cell_size)

    state = run_simulation(cfg, days=args.days, log_every=args.log_every, renderer=renderer)
    populations = state.populations
    logger.info(
        "Finished after %d days (%s): foxes=%d rabbits=%d",
        state.days_elapsed, state.status.value, populations.foxes, populations.rabbits,
    )

    if args.plot:
        from foxesrabbits.plotting import plot_history

        plot_history(state.energy_history, args.plot)
        logger.info("Energy history written to %s", args.plot)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
