"""Weighted checklist scoring for SEO, AEO and GEO."""

# Use explicit imports when needed:
# from engine.scoring.checklist import ScoringOptions, normalize_score
# from engine.scoring.seo import calculate_enhanced_seo_score
# from engine.scoring.aeo import calculate_enhanced_aeo_score
# from engine.scoring.geo import calculate_enhanced_geo_score
