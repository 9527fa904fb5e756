from copy import copy
import logging
import sys


class Bcolors:
    RESET_ALL = '\033[0m'
    BOLD = '\033[1m'
    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    BLUE = '\033[34m'


class CCFormatter(logging.Formatter):
    level_colors = {
        logging.DEBUG: Bcolors.BLUE,
        logging.INFO: Bcolors.GREEN,
        logging.WARNING: Bcolors.YELLOW,
        logging.ERROR: Bcolors.RED,
        logging.CRITICAL: Bcolors.RED,
    }

    def __init__(self, *args, stream=sys.stderr, **kwargs):
        super().__init__(*args, **kwargs)
        self.stream = stream

    def color_level_name(self, level_name, level_number):
        if not (colour := self.level_colors.get(level_number)):
            return str(level_name)
        return f'{Bcolors.BOLD}{colour}{level_name}{Bcolors.RESET_ALL}'

    def formatMessage(self, record):
        record_copy = copy(record)
        levelname = record_copy.levelname
        if self.stream.isatty():
            levelname = self.color_level_name(levelname, record_copy.levelno)
        record_copy.__dict__['levelprefix'] = levelname
        return super().formatMessage(record_copy)


def level_from_flags(verbose: bool=False, quiet: bool=False) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def configure_default_logging(
    stdout_level=None,
    force=True,
    custom_format_string: str='',
    stream=None,
):
    '''
    configures the root logger to emit to the given stream (defaults to stderr, leaving
    stdout to the actual program output).
    '''
    if not stdout_level:
        stdout_level = logging.INFO
    if not stream:
        stream = sys.stderr

    # make sure to have a clean root logger (in case setup is called multiple times)
    if force:
        handlers = list(logging.root.handlers)
        for h in handlers:
            logging.root.removeHandler(h)
            h.close()

    sh = logging.StreamHandler(stream)
    sh.setLevel(stdout_level)
    sh.setFormatter(CCFormatter(
        fmt=custom_format_string or default_fmt_string(),
        stream=stream,
    ))

    logging.root.addHandler(hdlr=sh)
    logging.root.setLevel(level=stdout_level)

    # too verbose ...
    for noisy_logger in ('github3', 'urllib3', 'cachecontrol'):
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)


def default_fmt_string():
    return '%(asctime)s [%(levelprefix)s] %(name)s: %(message)s'
