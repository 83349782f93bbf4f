import logging

_levels = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warn': logging.WARN,
    'warning': logging.WARN,
    'error': logging.ERROR,
    'critical': logging.CRITICAL,
}


def formatted_logger(label, level=None, format=None, date_format=None, file_path=None):
    """ Return the logger `label` with a stream handler, and a file handler when `file_path` is given

    Handlers are attached only the first time a label is configured.
    """
    log = logging.getLogger(label)
    if level is None:
        level = logging.INFO
    elif isinstance(level, str):
        level = _levels[level.lower()]
    log.setLevel(level)

    if log.handlers:
        return log

    if format is None:
        format = '%(asctime)s %(levelname)s:%(name)s:%(message)s'
    if date_format is None:
        date_format = '%Y-%m-%d %H:%M:%S'

    formatter = logging.Formatter(format, date_format)
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    log.addHandler(stream_handler)
    if file_path is not None:
        file_handler = logging.FileHandler(file_path)
        file_handler.setFormatter(formatter)
        log.addHandler(file_handler)
    return log
