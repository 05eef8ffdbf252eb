"""
Emotion Scorer for CareerCoach

Heuristic lexical analysis of free-text interview answers.

Each emotion has groups of Korean and English cue phrases. A group adds
its weight once when any of its phrases appears; an emotion's score is
capped at 1.0. Derived levels:

    confidence level = clamp(confidence - 0.5 * (anxiety + tension))
    stress level     = clamp(0.7 * (anxiety + tension) - 0.3 * calm)
"""

from careercoach.models.emotion import (
    Emotion,
    EmotionProfile,
    EmotionTrend,
    TrendDirection,
)


NEUTRAL = "neutral"

# (phrases, weight) per cue group
EMOTION_CUES: dict[Emotion, list[tuple[list[str], float]]] = {
    Emotion.CONFIDENCE: [
        (["확실히", "분명히", "당연히", "definitely", "certainly", "of course"], 0.3),
        (["경험이 있습니다", "구현했습니다", "성공했습니다",
          "i have experience", "i implemented", "i built", "we succeeded"], 0.4),
        (["자신있습니다", "잘 알고 있습니다", "i am confident", "i know this well"], 0.3),
    ],
    Emotion.ANXIETY: [
        (["잘 모르겠습니다", "불확실합니다", "i'm not sure", "i am not sure", "uncertain"], 0.4),
        (["어려울 것 같습니다", "힘들 것 같습니다", "might be difficult", "would be hard"], 0.3),
        (["시도해보겠습니다", "노력하겠습니다", "i will try", "i'll try"], 0.2),
    ],
    Emotion.PASSION: [
        (["관심이 많습니다", "흥미롭습니다", "very interested", "fascinating", "exciting"], 0.4),
        (["학습하고 있습니다", "연구하고 있습니다", "i am learning", "i'm learning", "researching"], 0.3),
        (["도전하고 싶습니다", "새로운 기술", "want to challenge", "new technology"], 0.3),
    ],
    Emotion.TENSION: [
        (["어려운", "복잡한", "도전적인", "difficult", "complex", "challenging"], 0.3),
        (["시간이 걸렸습니다", "고민했습니다", "took a long time", "struggled"], 0.2),
    ],
    Emotion.CALM: [
        (["차근차근", "단계별로", "체계적으로", "step by step", "systematically"], 0.4),
        (["잘 해결했습니다", "성공적으로", "resolved it", "successfully"], 0.3),
    ],
}

CONFIDENCE_SUGGESTIONS = [
    (0.3, "Back your answers with concrete project experience to sound more assured."),
    (0.6, "You show moderate confidence; state your conclusions more directly."),
    (None, "You answer with confidence; keep supporting it with specific examples."),
]

STRESS_SUGGESTIONS = [
    (0.7, "Stress is high. Pause, breathe and structure the answer before speaking."),
    (0.4, "Some tension shows. Break the answer into clear steps."),
    (None, "You stay composed under pressure."),
]

PRIMARY_EMOTION_SUGGESTIONS = {
    Emotion.ANXIETY.value: "When unsure, explain how you would find the answer.",
    Emotion.PASSION.value: "Your enthusiasm comes through; tie it to concrete results.",
    Emotion.TENSION.value: "Describe difficult problems in terms of how you solved them.",
    Emotion.CALM.value: "Your systematic approach is a strength; keep using it.",
}
BALANCED_SUGGESTION = "Your emotional tone is balanced."

FEEDBACK_TIPS = [
    "Use the STAR format (situation, task, action, result).",
    "Quantify outcomes where you can.",
    "It is fine to say what you do not know and how you would learn it.",
]


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


class EmotionScorer:
    """
    Scores emotions in interview answers.

    Pure: the same text always gives the same profile.
    """

    def score(self, text: str) -> dict[Emotion, float]:
        """Per-emotion scores in [0, 1]."""
        lowered = (text or "").lower()
        scores = {}
        for emotion in Emotion:
            total = 0.0
            for phrases, weight in EMOTION_CUES[emotion]:
                if any(phrase in lowered for phrase in phrases):
                    total += weight
            scores[emotion] = round(min(total, 1.0), 4)
        return scores

    @staticmethod
    def primary_emotion(scores: dict[Emotion, float]) -> str:
        """Highest score wins; ties go to the earlier emotion. All zero is neutral."""
        best = None
        for emotion in Emotion:
            if best is None or scores[emotion] > scores[best]:
                best = emotion
        if best is None or scores[best] <= 0.0:
            return NEUTRAL
        return best.value

    def analyze(self, text: str) -> EmotionProfile:
        """
        Analyze one answer.

        Args:
            text: Free-text answer

        Returns:
            EmotionProfile with scores, derived levels and a suggestion
        """
        scores = self.score(text)
        anxiety = scores[Emotion.ANXIETY]
        tension = scores[Emotion.TENSION]

        confidence_level = clamp(scores[Emotion.CONFIDENCE] - 0.5 * (anxiety + tension))
        stress_level = clamp(0.7 * (anxiety + tension) - 0.3 * scores[Emotion.CALM])
        primary = self.primary_emotion(scores)

        return EmotionProfile(
            scores=scores,
            primary_emotion=primary,
            confidence_level=round(confidence_level, 4),
            stress_level=round(stress_level, 4),
            suggestion=self.suggest(confidence_level, stress_level, primary),
        )

    @staticmethod
    def suggest(confidence_level: float, stress_level: float, primary: str) -> str:
        """One sentence per band: confidence, then stress, then primary emotion."""
        sentences = []

        for upper, sentence in CONFIDENCE_SUGGESTIONS:
            if upper is None or confidence_level < upper:
                sentences.append(sentence)
                break

        for lower, sentence in STRESS_SUGGESTIONS:
            if lower is None or stress_level > lower:
                sentences.append(sentence)
                break

        sentences.append(PRIMARY_EMOTION_SUGGESTIONS.get(primary, BALANCED_SUGGESTION))
        return " ".join(sentences)

    # =========================================================================
    # TRENDS AND REPORTS
    # =========================================================================

    def trend(self, history: list[EmotionProfile]) -> EmotionTrend:
        """
        Compare the first and last confidence levels of an ordered history.

        Any rise is improving, any drop is declining; equal levels are stable.
        """
        if not history:
            return EmotionTrend(direction=TrendDirection.STABLE, samples=0)

        first = history[0].confidence_level
        last = history[-1].confidence_level
        if last > first:
            direction = TrendDirection.IMPROVING
        elif last < first:
            direction = TrendDirection.DECLINING
        else:
            direction = TrendDirection.STABLE

        count = len(history)
        return EmotionTrend(
            direction=direction,
            samples=count,
            first_confidence=first,
            last_confidence=last,
            average_confidence=round(sum(p.confidence_level for p in history) / count, 4),
            average_stress=round(sum(p.stress_level for p in history) / count, 4),
        )

    @staticmethod
    def format_trend(trend: EmotionTrend) -> str:
        if trend.samples == 0:
            return "No answers analyzed yet."
        return (
            f"Emotion trend over {trend.samples} answer(s): confidence is {trend.direction.value} "
            f"({trend.first_confidence:.0%} -> {trend.last_confidence:.0%}). "
            f"Average confidence {trend.average_confidence:.0%}, "
            f"average stress {trend.average_stress:.0%}."
        )

    @staticmethod
    def comprehensive_feedback(profile: EmotionProfile) -> str:
        """Multi-line feedback report for one analyzed answer."""
        lines = [
            "=== Emotion Analysis ===",
            f"Primary emotion: {profile.primary_emotion}",
            f"Confidence level: {profile.confidence_level:.0%}",
            f"Stress level: {profile.stress_level:.0%}",
            "",
            "Scores:",
        ]
        for emotion, value in profile.scores.items():
            lines.append(f"- {emotion.value}: {value:.2f}")
        lines += ["", "Suggestion:", profile.suggestion, "", "Tips:"]
        lines += [f"- {tip}" for tip in FEEDBACK_TIPS]
        return "\n".join(lines)
