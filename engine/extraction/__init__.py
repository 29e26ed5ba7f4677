"""Page signal extraction package."""

# Lazy imports - use explicit imports when needed:
# from engine.extraction.platform import detect_blog_platform, get_blog_platform_name
# from engine.extraction.structure import analyze_content_structure
# from engine.extraction.trust import analyze_trust_signals
# from engine.extraction.interactions import analyze_interactions
