import os, sys, argparse

from utils.logging_config import setup_logging, get_logger, DEBUG_ENV_VAR

# Initialize logging early - will be reconfigured based on debug mode
setup_logging()
logger = get_logger(__name__)

from domain import DirectoryConfig
from state import app_state
from factory.data.formatters import users_to_dataframe, labels_to_dataframe
from services import (
    BenchmarksDBUsersInitializer,
    DBUserSystemService,
    DirectoryServiceError,
)
from utils.load_settings import load_settings


# =========================
#           APP
# =========================


def build_config(args: argparse.Namespace) -> DirectoryConfig:
    """Environment configuration overridden by the command line options."""
    env_config = DirectoryConfig.from_env()
    return DirectoryConfig(
        data_source=args.data_source or env_config.data_source,
        users_initializer=args.initializer or env_config.users_initializer,
        users_set_size=args.users_set_size
        if args.users_set_size is not None
        else env_config.users_set_size,
    )


def start_user_system(config: DirectoryConfig) -> DBUserSystemService:
    service = DBUserSystemService(
        config, initializers=[BenchmarksDBUsersInitializer()]
    )
    service.start()
    app_state.add_user_system(service)
    return service


def app(args: argparse.Namespace) -> int:
    """Run one command against the directory, returning the exit status."""

    if args.debug:
        os.environ[DEBUG_ENV_VAR] = "true"
        setup_logging("DEBUG")
        logger.info("Application started in DEBUG mode")

    if args.settings and not load_settings(args.settings):
        return 2

    app_state.register_extractors()

    try:
        service = start_user_system(build_config(args))

        match args.command:
            case "health":
                service.test()
                print("OK")

            case "users":
                print(users_to_dataframe(service.find_all_users()).to_string(index=False))

            case "user":
                user = service.find_user(args.user_id)
                if user is None:
                    print(f"User {args.user_id} not found")
                    return 1
                print(users_to_dataframe([user]).to_string(index=False))

            case "labels":
                user = service.find_user(args.user_id)
                if user is None:
                    print(f"User {args.user_id} not found")
                    return 1
                labels = app_state.label_registry.extract_all(user)
                print(labels_to_dataframe(labels).to_string(index=False))

    except DirectoryServiceError as e:
        logger.error(f"❌ {e}")
        return 1

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Database backed user system for task assigning"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--settings",
        default=None,
        help="Python settings file exporting DATA_SOURCE, USERS_INITIALIZER or USERS_SET_SIZE",
    )
    parser.add_argument(
        "--data-source",
        default=None,
        help="SQLite database path or file: URI of the directory",
    )
    parser.add_argument(
        "--initializer",
        default=None,
        help="Name of the users initializer to run at start",
    )
    parser.add_argument(
        "--users-set-size",
        default=None,
        help="Number of users per prefix the benchmarks initializer generates",
    )

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("health", help="Check the directory can be queried")
    commands.add_parser("users", help="List all enabled users")
    user_parser = commands.add_parser("user", help="Show one enabled user")
    user_parser.add_argument("user_id")
    labels_parser = commands.add_parser("labels", help="Show the labels of one user")
    labels_parser.add_argument("user_id")
    return parser


if __name__ == "__main__":
    sys.exit(app(build_parser().parse_args()))
