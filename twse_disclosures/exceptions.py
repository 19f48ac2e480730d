"""
Exceptions raised by twse_disclosures.
"""


class FetchError(Exception):
    """
    The bulk listing could not be fetched or understood.

    This is the only fatal error of a report run. Detail page failures
    never raise; they degrade to a "no data" result for one stock id.

    When raised from a pipeline run, ``run`` holds that run's ReportRun
    (state FAILED, no document).
    """

    run = None
