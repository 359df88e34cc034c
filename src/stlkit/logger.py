"""Contains the name for the logger of StlKit modules.

``stlkit`` uses a simple logging system based on the
`Logging <https://docs.python.org/3/library/logging.html>`__ standard library.
Logging messages are grouped in different levels:

* ``DEBUG``: Progress of a single decomposition or smoothing call
    (sampling strides, inner iterations).
* ``WARNING``: An indication that something unexpected
    happened which may require attention, e.g. a seasonal period that
    leaves too few points per cycle-subseries.

By default, only messages of level ``WARNING`` are displayed.

Calling applications can configure the format and log level of the displayed messages
by `Configuring Logging <https://docs.python.org/3/howto/logging.html#configuring-logging>`__
for ``stlkit.logger.stlkit_logger``, e.g.::

    >>> import logging
    >>> logging.basicConfig(
    ...     level=logging.DEBUG,
    ...     format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    ... )
"""
import logging

logger_name = "stlkit"
stlkit_logger = logging.getLogger(logger_name)
