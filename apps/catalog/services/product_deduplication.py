"""Product deduplication service using fuzzy matching."""

from typing import List, Tuple

from fuzzywuzzy import fuzz

from ..models import Product


# Thresholds for fuzzy matching
EXACT_MATCH_THRESHOLD = 100
HIGH_SIMILARITY_THRESHOLD = 90
MEDIUM_SIMILARITY_THRESHOLD = 80


def find_potential_duplicates(
    *,
    name: str,
    vendor: str,
    threshold: int = MEDIUM_SIMILARITY_THRESHOLD
) -> List[Tuple[Product, int, str]]:
    """
    Find products an admin might be about to re-create.

    Args:
        name: Product name to check
        vendor: Vendor name to check
        threshold: Minimum similarity score (0-100)

    Returns:
        List of (product, similarity_score, match_type) tuples, best first.
        match_type: 'exact', 'fuzzy_name', 'fuzzy_both'
    """
    name_norm = Product._normalize_string(name)
    vendor_norm = Product._normalize_string(vendor)

    candidates = []

    exact_matches = Product.objects.filter(
        name_normalized=name_norm,
        vendor_normalized=vendor_norm,
        is_active=True
    )

    for product in exact_matches:
        candidates.append((product, 100, 'exact'))

    if candidates:
        return candidates

    # Same vendor, similar name ("Galaxy S23" vs "Galaxy S23 5G")
    same_vendor = Product.objects.filter(
        vendor_normalized=vendor_norm,
        is_active=True
    ).exclude(name_normalized=name_norm)

    for product in same_vendor:
        name_similarity = fuzz.token_sort_ratio(name_norm, product.name_normalized)
        if name_similarity >= threshold:
            candidates.append((product, name_similarity, 'fuzzy_name'))

    # Vendor spelled differently ("Samsung" vs "Samsung Electronics")
    other_vendors = Product.objects.filter(
        is_active=True
    ).exclude(
        vendor_normalized=vendor_norm
    )[:100]

    for product in other_vendors:
        name_similarity = fuzz.token_sort_ratio(name_norm, product.name_normalized)
        vendor_similarity = fuzz.partial_ratio(vendor_norm, product.vendor_normalized)

        # Weighted average: name 70%, vendor 30%
        combined_score = int((name_similarity * 0.7) + (vendor_similarity * 0.3))

        if combined_score >= threshold:
            candidates.append((product, combined_score, 'fuzzy_both'))

    candidates.sort(key=lambda x: x[1], reverse=True)

    return candidates[:10]
