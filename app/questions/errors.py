class QuestionServiceError(Exception):
    pass


class QuestionStoreUnavailableError(QuestionServiceError):
    pass


class InvalidQuizRequestError(QuestionServiceError):
    pass
