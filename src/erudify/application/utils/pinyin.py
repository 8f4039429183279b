import re
import unicodedata

from pypinyin.contrib.tone_convert import to_tone

# ---------- Tone marks ----------

TONE_MARKS = {
    "ā": "a", "á": "a", "ǎ": "a", "à": "a",
    "ē": "e", "é": "e", "ě": "e", "è": "e",
    "ī": "i", "í": "i", "ǐ": "i", "ì": "i",
    "ō": "o", "ó": "o", "ǒ": "o", "ò": "o",
    "ū": "u", "ú": "u", "ǔ": "u", "ù": "u",
    "ǖ": "ü", "ǘ": "ü", "ǚ": "ü", "ǜ": "ü",
    "Ā": "A", "Á": "A", "Ǎ": "A", "À": "A",
    "Ē": "E", "É": "E", "Ě": "E", "È": "E",
    "Ī": "I", "Í": "I", "Ǐ": "I", "Ì": "I",
    "Ō": "O", "Ó": "O", "Ǒ": "O", "Ò": "O",
    "Ū": "U", "Ú": "U", "Ǔ": "U", "Ù": "U",
    "Ǖ": "Ü", "Ǘ": "Ü", "Ǚ": "Ü", "Ǜ": "Ü",
}  # fmt: skip

VOWELS = set("aeiouüAEIOUÜ") | set(TONE_MARKS)

NUMBERED_SYLLABLE_RE = re.compile(r"([A-Za-zÜü:" + "".join(TONE_MARKS) + r"]+)([1-5])")


def strip_tone(c: str) -> str:
    return TONE_MARKS.get(c, c)


def strip_tones(text: str) -> str:
    return "".join(strip_tone(c) for c in text)


def has_tone_mark(text: str) -> bool:
    return any(c in TONE_MARKS for c in text)


def compact(reading: str) -> str:
    """Lowercase and drop whitespace; the form readings are compared in."""
    return re.sub(r"\s+", "", reading.lower())


# ---------- Numbered -> diacritic ----------


def prettify(numbered: str) -> str:
    """Render numbered pinyin with tone marks: "zhi1 dao4" -> "zhī dào".

    Text without tone digits passes through, so already-marked pinyin and
    punctuation are left alone. A digit after a marked syllable replaces its
    tone; 5 means neutral (marks removed).
    """

    def _render(m: re.Match) -> str:
        letters, tone = m.group(1), m.group(2)
        base = strip_tones(letters).replace("u:", "ü").replace("U:", "Ü")
        if tone == "5":
            return base
        marked = to_tone(base.lower() + tone)
        if base[:1].isupper():
            marked = marked[:1].upper() + marked[1:]
        return marked

    return unicodedata.normalize("NFC", NUMBERED_SYLLABLE_RE.sub(_render, numbered))


# ---------- Prefix matching ----------


def strip_prefix_no_tones(text: str, prefix: str) -> str | None:
    """Strip prefix from text comparing base letters only.

    Returns the remainder of text, or None if prefix does not fully match.
    """
    if len(prefix) > len(text):
        return None
    for text_c, prefix_c in zip(text, prefix):
        if strip_tone(text_c) != strip_tone(prefix_c):
            return None
    return text[len(prefix) :]


# ---------- Typed answers ----------


def split_words(pinyin: str) -> list[str]:
    """Best-effort syllable splitting of unspaced pinyin.

    Whitespace starts a new chunk and is kept at its front, so joining the
    chunks gives back the input. When the split is wrong the learner can
    always type a space.

        split_words("xuesheng") -> ["xue", "sheng"]
        split_words("daan") -> ["daan"]
        split_words("da an") -> ["da", " an"]
    """
    parts: list[str] = []
    current = ""
    seen_vowel = False
    i = 0

    while i < len(pinyin):
        c = pinyin[i]

        if c.isspace():
            if current:
                parts.append(current)
                seen_vowel = False
            current = c
            i += 1
            while i < len(pinyin) and pinyin[i].isspace():
                current += pinyin[i]
                i += 1
            continue

        current += c
        if c in VOWELS:
            seen_vowel = True

        if i + 1 == len(pinyin):
            parts.append(current)
            current = ""
            break

        nxt = pinyin[i + 1]
        if seen_vowel:
            if nxt.isspace():
                parts.append(current)
                current = ""
                seen_vowel = False
            else:
                consonant_onset = nxt not in VOWELS and nxt.isalpha()
                # Codas stay with the current syllable: "n" and the "ng" pair.
                coda = nxt.lower() == "n" or (c.lower() == "n" and nxt.lower() == "g")
                if nxt not in "'’" and consonant_onset and not coda:
                    parts.append(current)
                    current = ""
                    seen_vowel = False
        i += 1

    if current:
        parts.append(current)
    return parts


def apply_tones(pinyin: str) -> str:
    """Apply a trailing tone digit typed by the learner.

    Digits 1-4 go to the first chunk without a tone mark, 5 neutralises the
    last chunk that has one. Without a trailing digit any numbered syllables
    are simply prettified.

        apply_tones("xuesheng2") -> "xuésheng"
        apply_tones("xuésheng1") -> "xuéshēng"
        apply_tones("xuéshēng5") -> "xuésheng"
    """
    stripped = pinyin.rstrip()
    if not stripped or stripped[-1] not in "12345":
        return prettify(pinyin)

    digit = stripped[-1]
    base = stripped[:-1] + pinyin[len(stripped) :]
    chunks = split_words(base)

    if digit == "5":
        marked = [i for i, chunk in enumerate(chunks) if has_tone_mark(chunk)]
        if marked:
            chunks[marked[-1]] += digit
    else:
        unmarked = [i for i, chunk in enumerate(chunks) if not has_tone_mark(chunk)]
        if unmarked:
            chunks[unmarked[0]] += digit
        elif chunks:
            chunks[-1] += digit

    return "".join(prettify(chunk) for chunk in chunks)
