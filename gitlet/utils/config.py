# What it does: Manages all read/write operations for the `.gitlet/config` file
# What data structure it uses: Map / Hash Table / Dictionary (the INI file format is a map of sections to key-value pairs, managed by Python's `configparser`)

import configparser
import io
import logging
import os

from .fileio import atomic_write, gitlet_path

logger = logging.getLogger(__name__)

DEFAULT_BRANCH = 'main'


def get_config_path(repo_root):  # Returns the path to the config file within the repository
    return gitlet_path(repo_root, 'config')


def read_config(repo_root): # Reads and returns the configuration as a ConfigParser object
    config = configparser.ConfigParser()
    config_path = get_config_path(repo_root)
    if os.path.exists(config_path):
        config.read(config_path)
    return config


def _split_key(key):
    try:
        section, option = key.split('.', 1)
    except ValueError:
        raise ValueError("Error: Invalid key format. Should be 'section.key'.")
    if not section or not option:
        raise ValueError("Error: Invalid key format. Should be 'section.key'.")
    return section, option


def write_config(repo_root, key, value): # Sets a configuration key to a value and writes it to the config file
    section, option = _split_key(key)
    config = read_config(repo_root)

    if not config.has_section(section):
        config.add_section(section)

    config.set(section, option, str(value))

    buffer = io.StringIO()
    config.write(buffer)
    atomic_write(get_config_path(repo_root), buffer.getvalue())


def get_value(repo_root, key, fallback=None):
    section, option = _split_key(key)
    return read_config(repo_root).get(section, option, fallback=fallback)


def get_default_branch(repo_root): # Branch name `init` points at the initial commit
    return get_value(repo_root, 'core.defaultbranch', fallback=DEFAULT_BRANCH) or DEFAULT_BRANCH


def get_verify_objects(repo_root): # Whether object reads re-hash their content (on unless explicitly disabled)
    try:
        return read_config(repo_root).getboolean('core', 'verifyobjects', fallback=True)
    except ValueError:
        logger.warning("Ignoring unparseable core.verifyobjects value in %s", get_config_path(repo_root))
        return True
