from .app import UnpluggedApp
from .logging_setup import setup_logger
from .tray import TrayController


def main() -> None:
    logger = setup_logger()
    logger.info("App start")

    tray = TrayController()
    app = UnpluggedApp(tray=tray, logger=logger)
    tray.attach(app)
    app.start()
    try:
        tray.run()
    finally:
        app.stop()
        logger.info("App stopped")


if __name__ == "__main__":
    main()
