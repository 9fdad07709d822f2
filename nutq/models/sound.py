"""
Arabic sound (phoneme) data model.
"""

from enum import Enum

from pydantic import BaseModel, Field


class ArticulationPoint(str, Enum):
    """Place of articulation (makhraj) of a sound."""

    THROAT_DEEP = "throat_deep"  # أقصى الحلق: ء ه
    THROAT_MIDDLE = "throat_middle"  # وسط الحلق: ح ع
    THROAT_SHALLOW = "throat_shallow"  # أدنى الحلق: غ خ
    TONGUE_BACK = "tongue_back"  # أقصى اللسان: ق ك
    TONGUE_MIDDLE = "tongue_middle"  # وسط اللسان: ج ش ي
    TONGUE_EDGE = "tongue_edge"  # حافة اللسان: ض
    TONGUE_TIP_UPPER = "tongue_tip_upper"  # طرف اللسان مع أصول الثنايا: ت د ط
    TONGUE_TIP_TEETH = "tongue_tip_teeth"  # طرف اللسان مع الأسنان: ث ذ ظ ز س ص
    TONGUE_TIP_GUM = "tongue_tip_gum"  # طرف اللسان مع اللثة: ن ر ل
    LIPS = "lips"  # الشفتان: ب م و
    LIP_TEETH = "lip_teeth"  # الشفة السفلى مع الأسنان: ف
    NASAL = "nasal"  # الخيشوم


class SoundCharacteristic(str, Enum):
    """Phonetic feature (sifa) of a sound."""

    VOICED = "voiced"  # مجهور
    VOICELESS = "voiceless"  # مهموس
    EMPHATIC = "emphatic"  # مفخم
    NON_EMPHATIC = "non_emphatic"  # مرقق
    STOP = "stop"  # شديد
    FRICATIVE = "fricative"  # رخو
    NASAL = "nasal"  # أنفي
    LATERAL = "lateral"  # جانبي
    TRILL = "trill"  # تكراري


class SoundPosition(str, Enum):
    """Position of the target sound inside a word."""

    INITIAL = "initial"
    MEDIAL = "medial"
    FINAL = "final"


class SyllableCount(str, Enum):
    """Number of syllables of a practice word."""

    MONO = "mono"
    BI = "bi"
    MULTI = "multi"


POSITION_NAMES: dict[SoundPosition, str] = {
    SoundPosition.INITIAL: "بداية الكلمة",
    SoundPosition.MEDIAL: "وسط الكلمة",
    SoundPosition.FINAL: "نهاية الكلمة",
}


class SyllableWords(BaseModel):
    """Practice words for one position, grouped by syllable count."""

    mono: list[str] = Field(default_factory=list)
    bi: list[str] = Field(default_factory=list)
    multi: list[str] = Field(default_factory=list)

    model_config = {"frozen": True}

    def get(self, syllables: SyllableCount) -> list[str]:
        return getattr(self, SyllableCount(syllables).value)

    def all(self) -> list[str]:
        return [*self.mono, *self.bi, *self.multi]


class RealWords(BaseModel):
    """Real practice words grouped by the position of the target sound."""

    initial: SyllableWords = Field(default_factory=SyllableWords)
    medial: SyllableWords = Field(default_factory=SyllableWords)
    final: SyllableWords = Field(default_factory=SyllableWords)

    model_config = {"frozen": True}

    def at(self, position: SoundPosition) -> SyllableWords:
        return getattr(self, SoundPosition(position).value)


class QuestionAnswer(BaseModel):
    """A comprehension question whose answer exercises the sound."""

    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)

    model_config = {"frozen": True}


class SoundExamples(BaseModel):
    """
    Practice material for each of the training levels.

    Syllable drills (isolation, cv, vc, vcv, nonsense_words) may be left
    empty in the content file; the content loader derives them from the letter.
    """

    isolation: str = ""
    cv: list[str] = Field(default_factory=list)
    vc: list[str] = Field(default_factory=list)
    vcv: list[list[str]] = Field(default_factory=list)
    nonsense_words: list[str] = Field(default_factory=list)
    real_words: RealWords = Field(default_factory=RealWords)
    phrases: list[str] = Field(default_factory=list)
    sentences: list[str] = Field(default_factory=list)
    story_retelling: str = ""
    story_telling_prompt: str = ""
    questions: list[QuestionAnswer] = Field(default_factory=list)
    spontaneous_prompt: str = ""

    model_config = {"frozen": True}


class ArabicSound(BaseModel):
    """
    A single Arabic consonant treated as a distinct speech sound.

    Attributes:
        id: Stable identifier (e.g. "ba")
        letter: The grapheme, one Arabic character
        name: Arabic name of the letter
        articulation_point: Place of articulation
        articulation_description: Human-readable description of the makhraj
        training_tip: Remedial advice shown after mistakes
        characteristics: Phonetic features
        similar_sounds: Letters that are easily confused with this one
        examples: Practice material per training level
    """

    id: str = Field(..., description="Stable sound identifier", min_length=1)
    letter: str = Field(..., description="Arabic grapheme", min_length=1, max_length=1)
    name: str = Field(..., description="Arabic name of the letter", min_length=1)
    articulation_point: ArticulationPoint
    articulation_description: str = ""
    training_tip: str = ""
    characteristics: list[SoundCharacteristic] = Field(default_factory=list)
    similar_sounds: list[str] = Field(default_factory=list)
    examples: SoundExamples = Field(default_factory=SoundExamples)

    model_config = {"frozen": True}

    @property
    def is_voiced(self) -> bool:
        return SoundCharacteristic.VOICED in self.characteristics

    @property
    def is_emphatic(self) -> bool:
        return SoundCharacteristic.EMPHATIC in self.characteristics

    def __str__(self) -> str:
        return f"ArabicSound({self.letter}, {self.id})"
