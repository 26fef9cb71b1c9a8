import json
import logging
import os

from smartattend.constants import (
    PROGRAM_STORAGE,
    ROSTER_FILE,
    LEDGER_FILE,
    SETTINGS_FILE,
)
from smartattend.errors import PersistenceFailure

logger = logging.getLogger(__name__)


def create_folders(data_folder=PROGRAM_STORAGE):
    if not os.path.exists(data_folder):
        os.makedirs(data_folder)


def load_data(filepath, default):
    if os.path.exists(filepath):
        try:
            with open(filepath, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            raise PersistenceFailure(filepath, str(e)) from e

    # first run: seed the file so the next read finds it
    save_data(filepath, default)
    return default


def save_data(filepath, data):
    try:
        folder = os.path.dirname(filepath)
        if folder and not os.path.exists(folder):
            os.makedirs(folder)

        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=4)
    except (OSError, TypeError, ValueError) as e:
        raise PersistenceFailure(filepath, str(e)) from e
    logger.debug("Saved %s", filepath)
    return True


def roster_path(data_folder=PROGRAM_STORAGE):
    return os.path.join(data_folder, ROSTER_FILE)


def ledger_path(data_folder=PROGRAM_STORAGE):
    return os.path.join(data_folder, LEDGER_FILE)


def settings_path(data_folder=PROGRAM_STORAGE):
    return os.path.join(data_folder, SETTINGS_FILE)


def load_roster(data_folder=PROGRAM_STORAGE):
    return load_data(roster_path(data_folder), [])


def save_roster(data_folder, students):
    return save_data(roster_path(data_folder), students)


def load_ledger(data_folder=PROGRAM_STORAGE):
    return load_data(ledger_path(data_folder), [])


def save_ledger(data_folder, sessions):
    return save_data(ledger_path(data_folder), sessions)


def load_settings(data_folder=PROGRAM_STORAGE):
    return load_data(settings_path(data_folder), {})


def save_settings(data_folder, settings):
    return save_data(settings_path(data_folder), settings)
