from snaptranslate.orchestrator.contracts import LanguagePair, TranslationResult


class Translator:
    async def translate(self, label: str, pair: LanguagePair) -> TranslationResult:
        """Translate one label. Raises TranslationError."""
        raise NotImplementedError
