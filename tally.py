from typing import Any, Dict, Iterable, List, Optional, Sequence

from questions import PollConfig, PollQuestion
from schemas import QuestionTally, SectionTallies, TallyEntry

NO_ANSWER = "—"


def tally_answers(
    question: PollQuestion,
    raw_values: Iterable[Any],
    total: Optional[int] = None,
    index: int = 0,
) -> QuestionTally:
    """
    Conta quantas vezes cada opção da pergunta aparece nas respostas.

    Valores fora da lista de opções são ignorados. Em multi-select o texto é
    separado por ',' e cada parte aparada; uma opção repetida na mesma
    resposta conta uma vez por ocorrência. `total` é a base do percentual.
    """
    counts: Dict[str, int] = {label: 0 for label in question.labels}

    for raw in raw_values:
        if not isinstance(raw, str) or not raw:
            continue
        if question.multi_select:
            for part in raw.split(","):
                label = part.strip()
                if label in counts:
                    counts[label] += 1
        elif raw in counts:
            counts[raw] += 1

    # sorted() é estável: empates mantêm a ordem das opções
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    data = [
        TallyEntry(
            label=label,
            count=count,
            percent=round(count / total * 100, 1) if total else 0.0,
        )
        for label, count in ranked
    ]
    top_answer = data[0].label if data and data[0].count > 0 else NO_ANSWER

    return QuestionTally(
        index=index,
        headline=question.headline,
        section=question.section,
        is_multi_select=question.multi_select,
        data=data,
        top_answer=top_answer,
    )


def tally_submissions(config: PollConfig, submissions: Sequence[Any]) -> List[QuestionTally]:
    """Uma contagem por pergunta, na ordem do questionário."""
    total = len(submissions)
    return [
        tally_answers(
            question,
            (config.answer_of(s, index) for s in submissions),
            total=total,
            index=index,
        )
        for index, question in enumerate(config.questions)
    ]


def group_by_section(config: PollConfig, tallies: Sequence[QuestionTally]) -> List[SectionTallies]:
    by_index = {t.index: t for t in tallies}
    return [
        SectionTallies(name=name, questions=[by_index[i] for i in indices if i in by_index])
        for name, indices in config.sections()
    ]
