"""
Transliteration tables for slug generation.

Lookup order for a given language:
1. language specific replacements (German umlauts, Bulgarian letters)
2. generic replacements (Greek, Cyrillic, Georgian, Armenian, ligatures)
3. remaining characters are decomposed (NFKD) and their combining
   marks dropped; whatever is still outside printable ASCII goes away.

Persian and Arabic are written right-to-left and keep their own
letters: an allowlist replaces the ASCII-only filter.
"""
import unicodedata

RTL_LANGUAGES = ("fa", "ar")

LANGUAGE_SPECIFIC = {
    "bg": {
        "х": "h", "Х": "H", "щ": "sht", "Щ": "SHT",
        "ъ": "a", "Ъ": "A", "ь": "y", "Ь": "Y",
    },
    "de": {
        "ä": "ae", "ö": "oe", "ü": "ue",
        "Ä": "AE", "Ö": "OE", "Ü": "UE",
    },
}

# replacement -> characters it replaces
_GENERIC = {
    "0": "°₀",
    "a": "αάἀἁἂἃἄἅἆἇὰᾰᾱᾲᾳᾴᾶᾷаაअª",
    "b": "бβბ",
    "d": "ðđƌȡɖɗдδდ",
    "e": "εέἐἑἒἓἔἕὲеёэєəეए",
    "f": "фφƒფ",
    "g": "гґγგ",
    "h": "ħηήჰ",
    "i": "ıιίϊΐἰἱἲἳἴἵἶἷὶῐῑῒῖῗіїиიइ",
    "j": "јჯ",
    "k": "ĸкκკქ",
    "l": "łŀлλლ",
    "m": "мμმ",
    "n": "ŉŋνнნ",
    "o": "øοὀὁὂὃὄὅὸоθოओº",
    "p": "пπპ",
    "q": "ყ",
    "r": "рρრ",
    "s": "сσςſს",
    "t": "тτŧთტ",
    "u": "µуუउў",
    "v": "вვϐ",
    "w": "ωώ",
    "x": "χξ",
    "y": "йыυϋύΰ",
    "z": "зζზ",
    "aa": "आ",
    "ae": "æǽ",
    "ai": "ऐ",
    "ch": "чჩჭ",
    "dj": "ђ",
    "dz": "џძ",
    "gh": "ღ",
    "ii": "ई",
    "kh": "хხ",
    "lj": "љ",
    "nj": "њ",
    "oe": "œ",
    "ps": "ψ",
    "sh": "шშ",
    "shch": "щ",
    "ss": "ß",
    "th": "þϑ",
    "ts": "цცწ",
    "uu": "ऊ",
    "ya": "я",
    "yu": "ю",
    "zh": "жჟ",
    "(c)": "©",
    "A": "ΑΆἈἉἊἋἌἍἎἏᾈᾉᾊᾋᾌᾍᾎᾏᾸᾹᾺΆᾼА",
    "B": "БΒ",
    "D": "ÐĐƉƊƋДΔ",
    "E": "ΕΈἘἙἚἛἜἝῈΈЕЁЭЄƏ",
    "F": "ФΦ",
    "G": "ГҐΓ",
    "H": "ΗΉĦ",
    "I": "ΙΊΪἸἹἻἼἽἾἿῘῙῚΊИІЇ",
    "K": "КΚ",
    "L": "ŁЛΛĿ",
    "M": "МΜ",
    "N": "ŊНΝ",
    "O": "ØΟΌὈὉὊὋὌὍῸΌОΘ",
    "P": "ПΠ",
    "R": "РΡ",
    "S": "СΣ",
    "T": "ŦТΤ",
    "U": "УЎ",
    "V": "В",
    "W": "ΩΏ",
    "X": "ΧΞ",
    "Y": "ΥΫῨῩῪΎЫЙ",
    "Z": "ЗΖ",
    "AE": "ÆǼ",
    "Ch": "Ч",
    "Dj": "Ђ",
    "Dz": "Џ",
    "Kh": "Х",
    "Lj": "Љ",
    "Nj": "Њ",
    "Oe": "Œ",
    "Ps": "Ψ",
    "Sh": "Ш",
    "Shch": "Щ",
    "Ss": "ẞ",
    "Th": "Þ",
    "Ts": "Ц",
    "Ya": "Я",
    "Yu": "Ю",
    "Zh": "Ж",
}

# Armenian, lowercase and capital letters
_ARMENIAN = {
    "a": "աԱ", "b": "բԲ", "g": "գԳ", "d": "դԴ", "e": "եէԵԷ", "z": "զԶ",
    "y": "ըյԸՅ", "t": "թտԹՏ", "zh": "ժԺ", "i": "իԻ", "l": "լԼ", "kh": "խԽ",
    "ts": "ծցԾՑ", "k": "կքԿՔ", "h": "հՀ", "dz": "ձՁ", "gh": "ղՂ", "ch": "ճչՃՉ",
    "m": "մՄ", "n": "նՆ", "sh": "շՇ", "o": "ոօՈՕ", "p": "պփՊՓ", "j": "ջՋ",
    "r": "ռրՌՐ", "s": "սՍ", "v": "վՎ", "f": "ֆՖ", "ev": "և",
}

# Only romanised when the text is not treated as Persian/Arabic
_ARABIC_SCRIPT = {
    "4": "٤",
    "5": "٥",
    "6": "٦",
    "a": "أا",
    "b": "ب",
    "d": "دض",
    "e": "إئ",
    "f": "ف",
    "g": "گ",
    "h": "حه",
    "i": "ی",
    "j": "ج",
    "k": "قكک",
    "l": "ل",
    "m": "م",
    "n": "ن",
    "o": "و",
    "p": "پ",
    "r": "ر",
    "s": "سص",
    "t": "تط",
    "y": "ي",
    "z": "ز",
    "aa": "عآ",
    "ch": "چ",
    "gh": "غ",
    "kh": "خ",
    "oe": "ؤ",
    "sh": "ش",
    "th": "ثذظ",
    "zh": "ژ",
}

RTL_ALLOWED = frozenset(
    "۰۱۲۳۴۵۶۷۸۹٤٥٦"
    "اأبدضإفگحهیجقكکلمنوپرسصتطيزآعچغخؤشثذظةئژء"
    "\u064b\u0654"
)


def _build_table(*groups) -> dict:
    table = {}
    for group in groups:
        for replacement, chars in group.items():
            for char in chars:
                table.setdefault(ord(char), replacement)
    return table


_LTR_TABLE = _build_table(_GENERIC, _ARMENIAN, _ARABIC_SCRIPT)
_RTL_TABLE = _build_table(_GENERIC, _ARMENIAN)
_LANGUAGE_TABLES = {
    lang: {ord(char): value for char, value in chars.items()}
    for lang, chars in LANGUAGE_SPECIFIC.items()
}


def _fold(char: str, allowed: frozenset) -> str:
    if " " <= char <= "~" or char in allowed:
        return char
    decomposed = unicodedata.normalize("NFKD", char)
    return "".join(
        c for c in decomposed
        if " " <= c <= "~" and unicodedata.category(c) != "Mn"
    )


def transliterate(value: str, language: str | None = "en") -> str:
    """Transliterate a UTF-8 string to ASCII (or to the RTL allowlist)."""
    language_table = _LANGUAGE_TABLES.get(language or "")
    if language_table:
        value = value.translate(language_table)

    if language in RTL_LANGUAGES:
        value = value.translate(_RTL_TABLE)
        allowed = RTL_ALLOWED
    else:
        value = value.translate(_LTR_TABLE)
        allowed = frozenset()

    return "".join(_fold(char, allowed) for char in value)
