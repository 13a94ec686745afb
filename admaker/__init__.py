"""
Admaker - prompt-driven ad, storyboard and slideshow generator.

Package structure:
    admaker/
        config.py           - Environment configuration
        prompts.py          - Prompt templates and builders
        catalog.py          - Brands, characters, scenes, decisions
        providers/          - Replicate and ElevenLabs clients
        services/           - Provider gateway
        jobs/               - Job model, poller, batch orchestrator
        studio/             - Page sessions and generation flows
        api/                - FastAPI application
        ui/                 - HTML pages
"""

__version__ = "1.0.0"
