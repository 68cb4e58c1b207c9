from snaptranslate.adapters.translate.base import Translator
from snaptranslate.orchestrator.contracts import LanguagePair, TranslationResult

# (label, target) -> text; anything else echoes back tagged with the target code
GLOSSARY = {
    ("banana", "de"): "Banane",
    ("banana", "fr"): "Banane",
    ("banana", "es"): "Plátano",
    ("cup", "de"): "Tasse",
    ("cup", "fr"): "Tasse",
    ("chair", "de"): "Stuhl",
    ("chair", "fr"): "Chaise",
    ("book", "de"): "Buch",
    ("book", "fr"): "Livre",
    ("plant", "de"): "Pflanze",
}


class MockTranslator(Translator):
    def __init__(self, status_store):
        self.status = status_store

    async def translate(self, label: str, pair: LanguagePair) -> TranslationResult:
        if not label or not label.strip():
            raise ValueError("translate() requires a non-empty label")
        text = GLOSSARY.get((label.lower(), pair.target_code), f"{label} [{pair.target_code}]")
        self.status.log(f"mock_translate: {label} -> {text}")
        return TranslationResult(text=text)
