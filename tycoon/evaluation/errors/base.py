""" Create generic errors that can be shared across the evaluation APIs. """


class EvaluationError(Exception):
    """ A generic error for errors that occur during peer evaluation. """
