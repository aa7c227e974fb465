"""
Medicine lookup services.

The external lookup queries the OpenFDA drug-label API by brand name. Any
upstream failure (network, timeout, HTTP error, malformed body) falls back
to a local name search.
"""
from typing import List, Dict

import requests
from django.conf import settings
from django.db.models import Q

from apps.catalog.models import Medicine
from apps.catalog.serializers import MedicineSerializer
from apps.core.observability import metrics, get_sanitized_logger
from apps.core.observability.tracing import trace_span

logger = get_sanitized_logger(__name__)

LOCAL_SEARCH_LIMIT = 50
EXTERNAL_RESULT_LIMIT = 10


class ExternalLookupError(Exception):
    """Raised when the drug-label API cannot be used."""
    pass


def search_local_medicines(search: str = '', limit: int = LOCAL_SEARCH_LIMIT):
    """Active medicines whose name or generic name contains `search`."""
    queryset = Medicine.objects.filter(is_active=True)
    if search:
        queryset = queryset.filter(
            Q(name__icontains=search) | Q(generic_name__icontains=search)
        )
    return queryset.order_by('name')[:limit]


def _first(values) -> str:
    if isinstance(values, list) and values:
        return str(values[0])
    return ''


def _map_label(result: Dict) -> Dict[str, str]:
    openfda = result.get('openfda') or {}
    return {
        'name': _first(openfda.get('brand_name')) or 'Unknown',
        'generic_name': _first(openfda.get('generic_name')),
        'brand': _first(openfda.get('manufacturer_name')),
        'strength': _first(openfda.get('strength')),
        'form': _first(openfda.get('dosage_form')),
        'manufacturer': _first(openfda.get('manufacturer_name')),
    }


def fetch_openfda_medicines(search: str) -> List[Dict[str, str]]:
    """
    Query the drug-label API for labels whose brand name matches `search`.

    Returns:
        List of {name, generic_name, brand, strength, form, manufacturer}

    Raises:
        ExternalLookupError: any transport, status or payload problem
    """
    params = {
        'search': f'openfda.brand_name:"{search}"',
        'limit': EXTERNAL_RESULT_LIMIT,
    }
    try:
        response = requests.get(
            settings.OPENFDA_LABEL_URL,
            params=params,
            timeout=settings.OPENFDA_TIMEOUT_SECONDS,
        )
        response.raise_for_status()
        results = response.json()['results']
    except (requests.RequestException, ValueError, KeyError, TypeError) as e:
        raise ExternalLookupError(str(e)) from e

    if not isinstance(results, list):
        raise ExternalLookupError('Unexpected payload shape')

    return [_map_label(result) for result in results if isinstance(result, dict)]


def lookup_external_medicines(search: str) -> List[Dict]:
    """
    External lookup with local fallback.

    Returns mapped OpenFDA labels, or serialized local medicines (max
    EXTERNAL_RESULT_LIMIT) when the external API is unavailable.
    """
    with trace_span('catalog.external_lookup', attributes={'search.length': len(search)}):
        try:
            medicines = fetch_openfda_medicines(search)
        except ExternalLookupError as e:
            metrics.external_medicine_lookups_total.labels(result='fallback').inc()
            logger.warning(
                'External medicine lookup failed, using local catalog',
                extra={
                    'event': 'external_medicine_lookup_fallback',
                    'error': str(e),
                }
            )
            local = Medicine.objects.filter(name__icontains=search)[:EXTERNAL_RESULT_LIMIT]
            return MedicineSerializer(local, many=True).data

    metrics.external_medicine_lookups_total.labels(result='success').inc()
    return medicines
