"""
Core business logic modules for CareerCoach

Contains:
- Model Clients: primary, gateway and mock generative-model clients
- Response Parser: maps model text to question sets and learning paths
- Orchestrator: single-model and chained generation with fallback
- Adaptive Difficulty: tier adjustment from answer history
- Emotion Scorer: lexical emotion analysis of answers
- Call Monitor: per-service latency, error and cost accounting
- Result Cache: per-kind LRU/TTL cache with single-flight population
- Task Queues: bounded background work for update-triggered events
- Coaching Service: the inbound facade over all of the above

Modules are imported directly (e.g. careercoach.core.orchestrator);
this package does not re-export them so that config and prompts can
depend on careercoach.core.errors without import cycles.
"""
