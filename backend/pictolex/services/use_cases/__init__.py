from pictolex.services.use_cases.analyze import AnalyzePhraseUseCase

__all__ = ["AnalyzePhraseUseCase"]
