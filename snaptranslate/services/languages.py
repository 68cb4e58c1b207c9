"""
Language selection provider.

Holds the (name, code) of the "from" and "to" languages. The pipeline only
ever reads a LanguagePair snapshot from here; it never mutates the selection.
"""
from snaptranslate.orchestrator.contracts import LanguagePair

LANG_CHOICES = [
    ("English",    "en"),
    ("German",     "de"),
    ("French",     "fr"),
    ("Spanish",    "es"),
    ("Italian",    "it"),
    ("Portuguese", "pt"),
    ("Dutch",      "nl"),
    ("Japanese",   "ja"),
    ("Chinese",    "zh"),
    ("Korean",     "ko"),
]


class LanguageSelection:
    def __init__(self, source_code: str = "en", target_code: str = "de", choices=None):
        self.choices = list(choices or LANG_CHOICES)
        self._names = {code: name for name, code in self.choices}
        self.from_lang = self._lookup(source_code)
        self.to_lang = self._lookup(target_code)

    def _lookup(self, code: str) -> tuple[str, str]:
        code = code.strip().lower()
        if code not in self._names:
            raise ValueError(f"unsupported language code: {code}")
        return self._names[code], code

    def select(self, source_code: str | None = None, target_code: str | None = None) -> LanguagePair:
        # validate both before touching either side
        new_from = self._lookup(source_code) if source_code else self.from_lang
        new_to = self._lookup(target_code) if target_code else self.to_lang
        self.from_lang, self.to_lang = new_from, new_to
        return self.pair()

    def swap(self) -> LanguagePair:
        self.from_lang, self.to_lang = self.to_lang, self.from_lang
        return self.pair()

    def pair(self) -> LanguagePair:
        return LanguagePair(source_code=self.from_lang[1], target_code=self.to_lang[1])
