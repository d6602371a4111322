import argparse
import logging
import os

from config.settings import TrialConfig, WindowConfig, default_settings_path, load_service_config
from game.app import ReactionApp


def main() -> None:
    parser = argparse.ArgumentParser(description="Reaction time game")
    parser.add_argument("--service-url", default="", help="Scoring service base URL")
    parser.add_argument("--log-level", default="INFO", help="DEBUG, INFO, WARNING, ...")
    parser.add_argument("--seed", type=int, default=None, help="Seed for stimulus delays")
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    service = load_service_config(
        default_settings_path(),
        env_url=args.service_url or os.getenv("REACTION_SERVICE_URL", ""),
        env_timeout=os.getenv("REACTION_SERVICE_TIMEOUT", ""),
    )
    logging.getLogger(__name__).info("scoring service: %s", service.base_url)

    app = ReactionApp(WindowConfig(), TrialConfig(), service, seed=args.seed)
    app.run()


if __name__ == "__main__":
    main()
