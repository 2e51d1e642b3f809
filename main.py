"""
Entry point for the Gym Admin panel.
Run this file to start the application.
"""
import logging
import sys

from ui.main_window import GymAdminApp
import config


def main() -> int:
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="[%(asctime)s] %(name)s %(levelname)s: %(message)s",
    )

    # Create the Application instance
    app = GymAdminApp(sys.argv)

    # Custom start method (handles server setup and login)
    app.start()

    # Start the event loop
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
