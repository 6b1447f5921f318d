"""Built-in predefined questions loaded into an empty bank at startup."""

from typing import Any

QUESTION_BANK: list[dict[str, Any]] = [
    {
        "category": "HR",
        "prompt": "Tell me about yourself and why this role is the right next step.",
        "tags": ["introduction", "motivation", "career"],
        "role_focus": "General",
        "company_context": "General",
        "difficulty": "beginner",
    },
    {
        "category": "HR",
        "prompt": "What kind of manager and team environment helps you do your best work?",
        "tags": ["culture", "collaboration", "communication"],
        "role_focus": "General",
        "company_context": "General",
        "difficulty": "beginner",
    },
    {
        "category": "HR",
        "prompt": "Describe a time you handled conflict professionally and what changed after it.",
        "tags": ["conflict", "resolution", "teamwork"],
        "role_focus": "General",
        "company_context": "General",
        "difficulty": "intermediate",
    },
    {
        "category": "Technical",
        "prompt": "Design a scalable URL shortener and explain your storage strategy.",
        "tags": ["system design", "scalability", "database"],
        "role_focus": "Backend Engineer",
        "company_context": "Google",
        "difficulty": "advanced",
    },
    {
        "category": "Technical",
        "prompt": "How would you optimize a React dashboard suffering from heavy re-renders?",
        "tags": ["react", "performance", "memoization"],
        "role_focus": "Frontend Engineer",
        "company_context": "Startup",
        "difficulty": "intermediate",
    },
    {
        "category": "Technical",
        "prompt": "Walk through how JWT auth should be secured in a production Node.js app.",
        "tags": ["security", "jwt", "node"],
        "role_focus": "Full Stack Engineer",
        "company_context": "Amazon",
        "difficulty": "intermediate",
    },
    {
        "category": "Technical",
        "prompt": "Explain CAP theorem tradeoffs for a globally distributed application.",
        "tags": ["distributed systems", "cap theorem", "consistency"],
        "role_focus": "Backend Engineer",
        "company_context": "Google",
        "difficulty": "advanced",
    },
    {
        "category": "Behavioral",
        "prompt": (
            "Tell me about a time you disagreed with a technical decision "
            "and how you handled it."
        ),
        "tags": ["leadership", "influence", "communication"],
        "role_focus": "General",
        "company_context": "General",
        "difficulty": "intermediate",
    },
    {
        "category": "Behavioral",
        "prompt": "Share an example where you delivered impact with limited resources.",
        "tags": ["ownership", "resourcefulness", "impact"],
        "role_focus": "General",
        "company_context": "Startup",
        "difficulty": "intermediate",
    },
    {
        "category": "Behavioral",
        "prompt": "Describe a failure, what you learned, and what changed in your process.",
        "tags": ["growth", "reflection", "improvement"],
        "role_focus": "General",
        "company_context": "General",
        "difficulty": "beginner",
    },
    {
        "category": "HR",
        "prompt": "Why do you want to work at Google specifically, and what value would you bring?",
        "tags": ["company fit", "motivation", "impact"],
        "role_focus": "General",
        "company_context": "Google",
        "difficulty": "intermediate",
    },
    {
        "category": "HR",
        "prompt": (
            "What attracts you to Amazon leadership principles, "
            "and which one reflects you most?"
        ),
        "tags": ["leadership principles", "culture", "values"],
        "role_focus": "General",
        "company_context": "Amazon",
        "difficulty": "intermediate",
    },
    {
        "category": "Behavioral",
        "prompt": "Give a STAR example of customer obsession in a product or engineering decision.",
        "tags": ["star", "customer obsession", "decision making"],
        "role_focus": "Product Engineer",
        "company_context": "Amazon",
        "difficulty": "advanced",
    },
    {
        "category": "Technical",
        "prompt": "How do you design observability for microservices before incidents happen?",
        "tags": ["observability", "monitoring", "reliability"],
        "role_focus": "Backend Engineer",
        "company_context": "Startup",
        "difficulty": "advanced",
    },
    {
        "category": "Technical",
        "prompt": "Explain tradeoffs between REST and GraphQL for a fast-moving product team.",
        "tags": ["api design", "rest", "graphql"],
        "role_focus": "Full Stack Engineer",
        "company_context": "Startup",
        "difficulty": "intermediate",
    },
    {
        "category": "Behavioral",
        "prompt": "Tell me about mentoring someone and the measurable outcome.",
        "tags": ["mentoring", "leadership", "impact"],
        "role_focus": "Senior Engineer",
        "company_context": "Google",
        "difficulty": "intermediate",
    },
]
