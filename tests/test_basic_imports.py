"""
Basic import tests to verify the core functionality.
"""


def test_models_imports():
    """Test that the content models can be imported and constructed."""
    from knowledge_service.models import Theory, TheoryCategory, UserProgressView

    theory = Theory(id="hicks-law", title="Hick's Law", category="ux-psychology")
    assert theory.category is TheoryCategory.UX_PSYCHOLOGY
    assert theory.metadata.tags == ()
    assert UserProgressView().read_theories == frozenset()


def test_recommendations_imports():
    """Test that recommendation engine modules can be imported."""
    from knowledge_service.recommendations import (
        KnowledgeHubRecommendationEngine,
        get_engine,
        initialize_engine,
    )

    assert callable(get_engine)
    assert callable(initialize_engine)
    assert KnowledgeHubRecommendationEngine().theories == ()


def test_package_level_exports():
    """Test that the top-level package re-exports the public API."""
    import knowledge_service

    for name in knowledge_service.__all__:
        assert hasattr(knowledge_service, name)


def test_web_imports():
    """Test that the Flask layer can be imported."""
    from app.main import create_app
    from app.knowledge_hub import create_knowledge_hub_module

    assert callable(create_app)
    assert callable(create_knowledge_hub_module)
