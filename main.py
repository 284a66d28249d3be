import logging
import sys

from PyQt6.QtWidgets import QApplication

from analysis.vowel_catalog import default_catalog
from explorer.session import VowelSpaceSession
from explorer.window import VowelSpaceWindow
from synth.engine import FormantSynth, SAMPLE_RATE

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s: %(message)s",
    datefmt="%H:%M:%S",
)


def main():
    app = QApplication(sys.argv)

    # ------------------------------------------------------------
    # 1. Reference data (validated; malformed data aborts start-up)
    # ------------------------------------------------------------
    catalog = default_catalog()

    # ------------------------------------------------------------
    # 2. Audio engine + session
    # ------------------------------------------------------------
    synth = FormantSynth(sample_rate=SAMPLE_RATE)
    session = VowelSpaceSession(synth=synth, catalog=catalog)

    # ------------------------------------------------------------
    # 3. Window
    # ------------------------------------------------------------
    win = VowelSpaceWindow(session, sample_rate=SAMPLE_RATE)
    win.show()
    code = app.exec()
    synth.stop()
    return code


if __name__ == "__main__":
    sys.exit(main())
