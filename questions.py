from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union
from pydantic import BaseModel

CDN = "https://files.manuscdn.com/user_upload_by_module/session_file/310419663030067302"

NONE_LABEL = "None"
CONDITIONAL_MAX_LENGTH = 255


class PollConfigError(ValueError):
    """Configuração de perguntas inconsistente."""


class InvalidAnswerError(ValueError):
    """Resposta que não corresponde às opções da pergunta."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


# ==================== MODELOS DE CONFIGURAÇÃO ====================

class PollOption(BaseModel):
    label: str
    image: Optional[str] = None

    class Config:
        frozen = True


class ConditionalField(BaseModel):
    """Campo de texto livre exibido quando `trigger_value` é escolhido."""
    trigger_value: str
    placeholder: str
    field_key: str  # coluna onde o texto é gravado

    class Config:
        frozen = True


class PollQuestion(BaseModel):
    headline: str
    section: str
    options: List[PollOption]
    multi_select: bool = False
    max_select: Optional[int] = None
    conditional_field: Optional[ConditionalField] = None

    class Config:
        frozen = True

    @property
    def labels(self) -> List[str]:
        return [opt.label for opt in self.options]


class SectionDivider(BaseModel):
    headline: str
    subtext: str
    image: Optional[str] = None

    class Config:
        frozen = True


def _opts(*labels: str, images: Sequence[str] = ()) -> List[PollOption]:
    images = list(images)
    return [
        PollOption(label=label, image=f"{CDN}/{images[i]}" if i < len(images) else None)
        for i, label in enumerate(labels)
    ]


# ==================== PERGUNTAS ====================

QUESTIONS: List[PollQuestion] = [
    # Lifestyle Intelligence Index (q0-q6)
    PollQuestion(
        headline="How would friends describe you?",
        section="Lifestyle",
        options=_opts(
            "Social Connector", "Wellness Focused", "Luxury Lover",
            "Lifelong Learner", "Adventurous Spirit", "Selectively Private",
            images=["SnfGcyEfDodHDCpd.jpg", "DlcPiGwfftCsfdHc.jpg", "esIxOmCrqkMKObxu.jpg",
                    "zOcysqKlaisbvKSc.jpg", "uKJzVnSTfstWROxf.jpg", "xNrebPdUvVWANptC.jpg"],
        ),
    ),
    PollQuestion(
        headline="When you attend events, you…",
        section="Lifestyle",
        options=_opts(
            "Bring Guests", "Come Solo", "Prefer Exclusive", "Like Small Groups", "Attend Most",
            images=["LZyENmKsspSrPjDp.jpg", "kHviZmLiKjOTUcEK.jpg", "hWHczaTsiunpXsSX.jpg",
                    "CBKOMsGZwLwRZybp.jpg", "vCkjfjcuqdVzokrd.jpg"],
        ),
    ),
    PollQuestion(
        headline="What makes you proud to live here?",
        section="Lifestyle",
        options=_opts(
            "The People", "The Amenities", "The Location", "The Reputation", "The Future Vision",
            images=["nmJhrOxtxbhUYcZu.jpg", "aSTkppnnzZgdLOpZ.jpg", "wVkNmUfpRvfTSEBI.jpg",
                    "VlNOfHRVDzDWNrGY.jpg", "MDVQHeLdXsxIrnhR.jpg"],
        ),
    ),
    PollQuestion(
        headline="What would WOW you?",
        section="Lifestyle",
        options=_opts(
            "Private Chef Night", "Longevity Lab", "Black Tie Gala",
            "Sunset Party", "Executive Salon", "Something Unexpected",
            images=["IpiwHGvozLAUmUlx.jpg", "KcSzhzkgksKXFaks.jpg", "WLJPmAWIxrLLoAgM.jpg",
                    "bhfPyuOiuGlBHlQU.jpg", "JVyKOUygjTUgEvoZ.jpg", "ojrEyEwmyeRBSMjr.jpg"],
        ),
    ),
    PollQuestion(
        headline="What would make you invite a friend?",
        section="Lifestyle",
        options=_opts(
            "Elegant & Upscale", "High Energy Fun", "Health Focused",
            "Thought Provoking", "Family Friendly", "Invite Only VIP",
            images=["TciAztsFmHqEsUrK.jpg", "HcElROualeZogVjA.jpg", "WBYwjTiLZlrBqYoE.jpg",
                    "DDeDbQXPhpzkNEpW.jpg", "vPqxLdMigVEMight.jpg", "IpoQvawTskFmeWoi.jpg"],
        ),
    ),
    PollQuestion(
        headline="What format do you prefer?",
        section="Lifestyle",
        options=_opts(
            "Large Events", "Small & Curated", "Rotating Variety", "Structured Series", "Surprise Pop-Ups",
            images=["QaTQekRQNEZEFmIg.jpg", "hfcXqFLjnfNCpBRV.jpg", "AMOjjEVcsUqlvWjF.jpg",
                    "VYrPBWNmhguBJQqe.jpg", "GSXFajejuikYMJMZ.jpg"],
        ),
    ),
    PollQuestion(
        headline="Interested in VIP early access?",
        section="Lifestyle",
        options=_opts(
            "Yes, Absolutely", "Occasionally", "Open to All Events", "Not Necessary",
            images=["mOsGWUiqtsQNebJV.jpg", "UNlCTEmtciyCdyQT.jpg", "CTvaEDqsrKWqDdxF.jpg",
                    "wLZDDRwiCtAcTJIj.jpg"],
        ),
    ),

    # Household & Life Stage (q7-q9)
    PollQuestion(
        headline="Which best describes your household?",
        section="Household",
        options=_opts("Single", "Couple", "Young Family", "Family w/ Teens", "Empty Nesters", "Retired"),
    ),
    PollQuestion(
        headline="Household size?",
        section="Household",
        options=_opts("1", "2", "3", "4", "5+"),
    ),
    PollQuestion(
        headline="Children at home?",
        section="Household",
        options=_opts("No", "Yes"),
        conditional_field=ConditionalField(
            trigger_value="Yes", placeholder="Ages (optional)", field_key="q9_ages"
        ),
    ),

    # Age & Work Stage (q10-q11)
    PollQuestion(
        headline="Your age range?",
        section="Age",
        options=_opts("18–29", "30–39", "40–49", "50–59", "60–69", "70+"),
    ),
    PollQuestion(
        headline="Work status?",
        section="Age",
        options=_opts("Full-Time", "Part-Time", "Retired", "Semi-Retired"),
    ),

    # Availability (q12-q13)
    PollQuestion(
        headline="When are you most available?",
        section="Availability",
        options=_opts(
            "Weekday Mornings", "Weekday Afternoons", "Weekday Evenings",
            "Weekend Mornings", "Weekend Afternoons", "Weekend Evenings",
        ),
    ),
    PollQuestion(
        headline="How often would you attend?",
        section="Availability",
        options=_opts("Weekly", "2–3x / Month", "Monthly", "Occasionally", "Rarely"),
    ),

    # Wellness (q14-q15)
    PollQuestion(
        headline="Wellness interests?",
        section="Wellness",
        multi_select=True,
        options=_opts(
            "Group Fitness", "Yoga / Pilates", "Walking Club", "Strength Training",
            "Personal Training", "Mobility", "Meditation", "Nutrition Talks", NONE_LABEL,
            images=["LWugyBDAVaTyPbUd.jpg", "MpcIjPLcJVoWfght.jpg", "ABUTvtVqPAHPkZWh.jpg",
                    "LWugyBDAVaTyPbUd.jpg", "dOmooegqwRmFrHaV.jpg", "wFGXkopGrjRAKNTp.jpg",
                    "JYpJlQxGZBgRSjQS.jpg", "loyJldDIriZLoEZp.jpg", "LqnfOUTACjjZdnwp.jpg"],
        ),
    ),
    PollQuestion(
        headline="Fitness level?",
        section="Wellness",
        options=_opts("Beginner", "Intermediate", "Advanced", "Low-Impact Preferred"),
    ),

    # Lifestyle Interests (q16-q17)
    PollQuestion(
        headline="Top lifestyle interests?",
        section="Lifestyle Interests",
        multi_select=True,
        max_select=5,
        options=_opts(
            "Social Mixers", "Live Music", "Themed Parties", "Cooking / Cocktails", "Game Nights",
            "Educational Talks", "Outdoor Events", "Volunteer Events", "Holiday Events", "Family Events",
            images=["HXEPkvyuTKNKixnq.jpeg", "ntutfJGQiwMTTXpC.jpeg", "ANCOTJLuadSyuWwB.jpg",
                    "arDZMShztdSgADKD.jpeg", "hZNjbSmFPhFVwpHw.jpg", "OpCIEfITyBVXdlIi.jpg",
                    "tYpnkRpSDsMUHxMC.jpeg", "oNPsjvktdpjehUeg.jpg", "oarQIxyWNJdPFfHs.jpg",
                    "fnKoAobvkLxZJVaK.jpg"],
        ),
    ),
    PollQuestion(
        headline="Event energy?",
        section="Lifestyle Interests",
        options=_opts("Active", "Social", "Educational", "Relaxed", "A Mix"),
    ),

    # Pets & Hobbies (q18-q19)
    PollQuestion(
        headline="Pets?",
        section="Pets & Hobbies",
        options=_opts(
            "No", "Dog(s)", "Cat(s)", "Other",
            images=["LqnfOUTACjjZdnwp.jpg", "xMQAzLrWeNjuwqgn.png", "odiGAuWZSJIkdskT.jpg",
                    "rnjykiersSCCmwdF.jpeg"],
        ),
        conditional_field=ConditionalField(
            trigger_value="Other", placeholder="What kind? (optional)", field_key="q18_other"
        ),
    ),
    PollQuestion(
        headline="Hobbies?",
        section="Pets & Hobbies",
        multi_select=True,
        options=_opts(
            "Travel", "Food & Wine", "Arts", "Sports", "Gardening", "Tech", "Reading", "Cards / Games",
            images=["DxhJIWkDDTDaQMCM.jpeg", "KfQiSdYobxfrUZTM.jpg", "oNVxitGNFpezvGDJ.jpg",
                    "dfjrDgLNOTILzXNU.jpg", "FqTNgbqmBuFUzksJ.jpg", "zkYsTtuOQVZxxcgn.jpg",
                    "dfOHsJoqrlSSCqny.jpg", "hZNjbSmFPhFVwpHw.jpg"],
        ),
    ),

    # Communication (q20)
    PollQuestion(
        headline="How should we notify you?",
        section="Communication",
        options=_opts("Email", "Community App", "Text", "Printed Calendar", "Social Media"),
    ),
]

# Chave = índice da primeira pergunta da seção
SECTION_DIVIDERS: Dict[int, SectionDivider] = {
    7: SectionDivider(
        headline="Tell Us About Your Lifestyle",
        subtext="This helps us tailor experiences to your season of life.",
        image=f"{CDN}/pneNzHcYtDudAtWo.png",
    ),
    10: SectionDivider(
        headline="Age & Career",
        subtext="A quick snapshot to help us plan around your schedule.",
        image=f"{CDN}/LPQBbtrHHSvgomXa.jpg",
    ),
    12: SectionDivider(
        headline="Your Availability",
        subtext="So we can plan events when you're most likely to attend.",
    ),
    14: SectionDivider(
        headline="Wellness & Fitness",
        subtext="Help us curate the right wellness experiences for you.",
        image=f"{CDN}/MpcIjPLcJVoWfght.jpg",
    ),
    16: SectionDivider(
        headline="Lifestyle & Events",
        subtext="What kind of experiences excite you most?",
        image=f"{CDN}/HXEPkvyuTKNKixnq.jpeg",
    ),
    18: SectionDivider(
        headline="Pets & Hobbies",
        subtext="The little details that make our community unique.",
        image=f"{CDN}/xMQAzLrWeNjuwqgn.png",
    ),
    20: SectionDivider(
        headline="Stay Connected",
        subtext="How would you like to hear about upcoming events?",
        image=f"{CDN}/tUEVBCZIUyvGyJfz.jpg",
    ),
}

# Índice da pergunta -> coluna em poll_submissions
ANSWER_FIELDS: Tuple[str, ...] = (
    "q0", "q1", "q2", "q3", "q4", "q5", "q6",
    "q7", "q8", "q9",
    "q10", "q11",
    "q12", "q13",
    "q14", "q15",
    "q16", "q17",
    "q18", "q19",
    "q20",
)


# ==================== CONFIGURAÇÃO VALIDADA ====================

class PollConfig:
    """
    Conjunto imutável de perguntas + mapeamento explícito para as colunas.
    Valida tudo na construção: um índice sem coluna é erro de configuração.
    """

    def __init__(
        self,
        questions: Sequence[PollQuestion],
        answer_fields: Sequence[str],
        dividers: Optional[Mapping[int, SectionDivider]] = None,
    ):
        self.questions: Tuple[PollQuestion, ...] = tuple(questions)
        self.answer_fields: Tuple[str, ...] = tuple(answer_fields)
        self.dividers: Dict[int, SectionDivider] = dict(dividers or {})
        self._validate()

    def _validate(self) -> None:
        if len(self.answer_fields) < len(self.questions):
            raise PollConfigError(
                f"{len(self.questions)} perguntas mas apenas {len(self.answer_fields)} campos de resposta"
            )
        if len(set(self.answer_fields)) != len(self.answer_fields):
            raise PollConfigError("Campos de resposta duplicados")

        for index, question in enumerate(self.questions):
            labels = question.labels
            if not labels:
                raise PollConfigError(f"Pergunta {index} sem opções")
            if len(set(labels)) != len(labels):
                raise PollConfigError(f"Pergunta {index} tem opções duplicadas")
            if question.max_select is not None:
                if not question.multi_select:
                    raise PollConfigError(f"Pergunta {index}: max_select exige multi_select")
                if question.max_select < 1:
                    raise PollConfigError(f"Pergunta {index}: max_select deve ser >= 1")
            cond = question.conditional_field
            if cond is not None and cond.trigger_value not in labels:
                raise PollConfigError(
                    f"Pergunta {index}: gatilho '{cond.trigger_value}' não é uma opção"
                )

        for index in self.dividers:
            if not 0 <= index < len(self.questions):
                raise PollConfigError(f"Divisor de seção fora do intervalo: {index}")

    def __len__(self) -> int:
        return len(self.questions)

    def question(self, index: int) -> PollQuestion:
        if not 0 <= index < len(self.questions):
            raise PollConfigError(f"Índice de pergunta inválido: {index}")
        return self.questions[index]

    def field_for(self, index: int) -> str:
        self.question(index)
        return self.answer_fields[index]

    def answer_of(self, record: Any, index: int) -> Any:
        """Lê a resposta bruta de uma linha ORM ou de um dict."""
        key = self.field_for(index)
        if isinstance(record, Mapping):
            return record.get(key)
        return getattr(record, key, None)

    def conditional_fields(self) -> List[Tuple[int, ConditionalField]]:
        return [
            (i, q.conditional_field)
            for i, q in enumerate(self.questions)
            if q.conditional_field is not None
        ]

    def sections(self) -> List[Tuple[str, List[int]]]:
        """Agrupa perguntas consecutivas da mesma seção."""
        groups: List[Tuple[str, List[int]]] = []
        for i, question in enumerate(self.questions):
            if groups and groups[-1][0] == question.section:
                groups[-1][1].append(i)
            else:
                groups.append((question.section, [i]))
        return groups

    # ==================== VALIDAÇÃO DE ENTRADA ====================

    def normalize_answer(self, index: int, value: Union[str, Sequence[str], None]) -> Optional[str]:
        """
        Converte a resposta enviada no formato gravado no banco.
        Vazio vira None; multi-select é gravado unido por ','.
        """
        question = self.question(index)
        field = self.field_for(index)

        if value is None:
            return None

        if not question.multi_select:
            if not isinstance(value, str):
                raise InvalidAnswerError(field, "esperado um único valor")
            if value == "":
                return None
            if value not in question.labels:
                raise InvalidAnswerError(field, f"opção desconhecida '{value}'")
            return value

        if isinstance(value, str):
            parts = value.split(",")
        else:
            parts = list(value)
        selected = []
        for part in parts:
            if not isinstance(part, str):
                raise InvalidAnswerError(field, "opções devem ser texto")
            label = part.strip()
            if label:
                selected.append(label)

        if not selected:
            return None
        for label in selected:
            if label not in question.labels:
                raise InvalidAnswerError(field, f"opção desconhecida '{label}'")
        if len(set(selected)) != len(selected):
            raise InvalidAnswerError(field, "opção repetida")
        if question.max_select is not None and len(selected) > question.max_select:
            raise InvalidAnswerError(field, f"no máximo {question.max_select} opções")
        if NONE_LABEL in question.labels and NONE_LABEL in selected and len(selected) > 1:
            raise InvalidAnswerError(field, f"'{NONE_LABEL}' não pode ser combinada com outras opções")
        return ",".join(selected)

    def normalize_conditional(self, index: int, answer: Optional[str], text: Optional[str]) -> Optional[str]:
        """Mantém o texto livre só quando a opção gatilho foi escolhida."""
        cond = self.question(index).conditional_field
        if cond is None or answer != cond.trigger_value or text is None:
            return None
        text = text.strip()
        if not text:
            return None
        if len(text) > CONDITIONAL_MAX_LENGTH:
            raise InvalidAnswerError(cond.field_key, f"máximo de {CONDITIONAL_MAX_LENGTH} caracteres")
        return text


poll_config = PollConfig(QUESTIONS, ANSWER_FIELDS, SECTION_DIVIDERS)
