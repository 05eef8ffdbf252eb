"""
Canned fallback content.

When a model call fails, the orchestrator substitutes one of these
role-specific sets, chosen by keyword-matching the prompt. Every set here
satisfies the QuestionSet and LearningPath invariants, and every canned
path keeps at least one step that survives the junior filter.
"""

from careercoach.models.learning_path import LearningPath, LearningStep
from careercoach.models.profile import DifficultyTier, StepDifficulty
from careercoach.models.question import QuestionSet


# ============================================================================
# KEYWORD ROUTING
# ============================================================================

# Checked in order; first group with a matching keyword wins
ROLE_KEYWORDS: list[tuple[str, list[str]]] = [
    ("frontend", ["frontend", "front-end", "react", "vue", "javascript", "typescript"]),
    ("data", ["data engineer", "data scientist", "machine learning", "ml engineer", "ai engineer"]),
    ("devops", ["devops", "kubernetes", "infrastructure", "security engineer"]),
    ("backend", ["backend", "back-end", "full-stack", "architect", "spring", "java", "server"]),
]

DEFAULT_GROUP = "general"


def select_group(prompt: str) -> str:
    """
    Pick the canned-content group for a prompt.

    The "Target Role:" line is matched first; without one the whole
    prompt is searched.
    """
    text = prompt.lower()
    for line in text.splitlines():
        if line.strip().startswith("target role:"):
            group = _match_keywords(line)
            if group:
                return group
            break
    return _match_keywords(text) or DEFAULT_GROUP


def _match_keywords(text: str) -> str | None:
    for group, keywords in ROLE_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return group
    return None


# ============================================================================
# CANNED QUESTIONS
# ============================================================================

FALLBACK_QUESTIONS: dict[str, list[str]] = {
    "backend": [
        "How does Spring Boot auto-configuration decide which beans to create?",
        "What is the N+1 query problem in JPA, and how do you detect and fix it?",
        "What principles do you follow when designing a RESTful API?",
        "Which database index types do you know, and when would you use each?",
        "Explain the ACID properties of a transaction with a concrete example.",
    ],
    "frontend": [
        "How does a virtual DOM reduce the cost of UI updates?",
        "How do you decide between local component state and a global store?",
        "Walk through how you would find and fix a slow page render.",
        "Compare client-side and server-side rendering. When would you choose each?",
        "How do you make a complex form accessible to keyboard and screen-reader users?",
    ],
    "data": [
        "Compare ETL and ELT. When would you pick one over the other?",
        "How do you choose a partitioning strategy for a large table?",
        "How do you detect and handle data drift in a production model or pipeline?",
        "Explain the bias-variance trade-off using a project you worked on.",
        "How do you make a batch pipeline idempotent so it can be safely rerun?",
    ],
    "devops": [
        "How would you roll out a risky change with zero downtime?",
        "What does a good alert look like, and how do you avoid alert fatigue?",
        "How do Kubernetes liveness and readiness probes differ?",
        "How do you keep secrets out of source control and build logs?",
        "Walk through how you would investigate a sudden spike in latency.",
    ],
    "general": [
        "Describe the most technically challenging project you have worked on.",
        "How do you approach learning a technology you have never used?",
        "Tell me about a production issue you debugged and what you learned.",
        "How do you balance delivery speed with code quality?",
        "How do you give and receive feedback in code reviews?",
    ],
}

FALLBACK_ANALYSIS = (
    "Canned question set: the AI service was unavailable, so general questions "
    "for the candidate's role were used."
)


def fallback_questions(prompt: str, tier: DifficultyTier) -> QuestionSet:
    """Canned question set for the prompt's role group."""
    group = select_group(prompt)
    return QuestionSet(
        questions=list(FALLBACK_QUESTIONS[group]),
        analysis=FALLBACK_ANALYSIS,
        difficulty=tier,
        degraded=True,
    )


# ============================================================================
# CANNED LEARNING PATHS
# ============================================================================

def _step(title, description, difficulty, estimated_time, resources, objective):
    return LearningStep(
        title=title,
        description=description,
        difficulty=difficulty,
        estimated_time=estimated_time,
        resources=resources,
        objective=objective,
    )


FALLBACK_PATHS: dict[str, dict] = {
    "backend": {
        "steps": [
            ("Spring Boot fundamentals", "Core Spring concepts and dependency injection.",
             StepDifficulty.BEGINNER, "2 weeks",
             ["Spring Boot reference guide", "Spring Guides"],
             "Build a small REST service with Spring Boot"),
            ("Database access with JPA", "Entity mapping, transactions and query tuning basics.",
             StepDifficulty.INTERMEDIATE, "3 weeks",
             ["Hibernate ORM user guide", "High-Performance Java Persistence"],
             "Model a relational schema and avoid N+1 queries"),
            ("Microservices architecture", "Service boundaries, messaging and resilience patterns.",
             StepDifficulty.ADVANCED, "6 weeks",
             ["Building Microservices", "microservices.io patterns"],
             "Split a monolith into independently deployable services"),
        ],
        "strategy": "Solidify the framework basics, then persistence, then distribution.",
        "duration": "11 weeks",
    },
    "frontend": {
        "steps": [
            ("Modern JavaScript and TypeScript", "Language features, modules and typing.",
             StepDifficulty.BEGINNER, "2 weeks",
             ["MDN JavaScript guide", "TypeScript handbook"],
             "Write type-safe modules with confidence"),
            ("Component state management", "Local state, context and global stores.",
             StepDifficulty.INTERMEDIATE, "3 weeks",
             ["React docs", "Redux essentials"],
             "Choose the right state location for each piece of data"),
            ("Rendering performance optimization", "Profiling, memoization and code splitting.",
             StepDifficulty.ADVANCED, "4 weeks",
             ["web.dev performance", "React profiler docs"],
             "Diagnose and fix slow renders in a large app"),
        ],
        "strategy": "Strengthen language fundamentals before framework-level tuning.",
        "duration": "9 weeks",
    },
    "data": {
        "steps": [
            ("SQL and data modeling basics", "Joins, window functions and normal forms.",
             StepDifficulty.BEGINNER, "2 weeks",
             ["Mode SQL tutorial", "The Data Warehouse Toolkit"],
             "Write correct analytical queries"),
            ("Batch pipelines with Python", "Ingestion, validation and idempotent loads.",
             StepDifficulty.INTERMEDIATE, "3 weeks",
             ["Fundamentals of Data Engineering", "pandas documentation"],
             "Ship a rerunnable daily pipeline"),
            ("Distributed processing with Spark", "Partitioning, shuffles and tuning.",
             StepDifficulty.ADVANCED, "5 weeks",
             ["Spark: The Definitive Guide"],
             "Process large datasets efficiently"),
        ],
        "strategy": "Master the data basics, then automate, then scale out.",
        "duration": "10 weeks",
    },
    "devops": {
        "steps": [
            ("Linux and networking essentials", "Processes, permissions, DNS and HTTP.",
             StepDifficulty.BEGINNER, "2 weeks",
             ["The Linux Command Line", "High Performance Browser Networking"],
             "Troubleshoot a host from the shell"),
            ("Containers and CI/CD", "Docker images and automated pipelines.",
             StepDifficulty.INTERMEDIATE, "3 weeks",
             ["Docker docs", "GitHub Actions docs"],
             "Automate build, test and deploy for a service"),
            ("Kubernetes operations", "Deployments, probes, autoscaling and observability.",
             StepDifficulty.ADVANCED, "5 weeks",
             ["Kubernetes docs", "Site Reliability Engineering"],
             "Run a service reliably on a cluster"),
        ],
        "strategy": "Build operating fundamentals before orchestration.",
        "duration": "10 weeks",
    },
    "general": {
        "steps": [
            ("Programming fundamentals", "Data structures, algorithms and clean code.",
             StepDifficulty.BEGINNER, "3 weeks",
             ["Clean Code", "LeetCode easy problems"],
             "Write readable, tested code"),
            ("Version control and collaboration", "Git workflows and code review.",
             StepDifficulty.BEGINNER, "1 week",
             ["Pro Git"],
             "Work effectively in a shared codebase"),
            ("Software design principles", "SOLID, patterns and refactoring.",
             StepDifficulty.INTERMEDIATE, "4 weeks",
             ["Refactoring", "Head First Design Patterns"],
             "Structure code that is easy to change"),
        ],
        "strategy": "Build durable fundamentals that transfer across roles.",
        "duration": "8 weeks",
    },
}


def fallback_learning_path(prompt: str) -> LearningPath:
    """Canned learning path for the prompt's role group."""
    group = select_group(prompt)
    canned = FALLBACK_PATHS[group]
    return LearningPath(
        steps=[_step(*step) for step in canned["steps"]],
        strategy=canned["strategy"],
        total_duration=canned["duration"],
        degraded=True,
    )


def fallback_skill_analysis(prompt: str) -> str:
    """Plain-text analysis used when the analysis model is unavailable."""
    group = select_group(prompt)
    topics = ", ".join(step[0] for step in FALLBACK_PATHS[group]["steps"])
    return (
        "Automated skill analysis unavailable. "
        f"Recommended focus areas for this role: {topics}."
    )
