"""
Lab Label Service Client
========================

Python SDK for interacting with Lab Label Service.

Usage:
    from lab_label_service.client import PrintClient

    client = PrintClient('http://localhost:5000', api_key='your-key')

    # Print one label per container
    result = client.print_labels(record, printer='ZDesigner GK420t', wait=True)

    # Render without printing
    preview = client.preview_labels(record, language='zpl')
"""

import requests
from typing import Dict, Any, Optional, List


class PrintClient:
    """Client for Lab Label Service."""

    def __init__(self, base_url: str = 'http://localhost:5000', api_key: str = None):
        """
        Initialize client.

        Args:
            base_url: Base URL of the label service
            api_key: API key for authentication
        """
        self.base_url = base_url.rstrip('/')
        self.api_key = api_key

    def _headers(self) -> Dict[str, str]:
        """Get request headers."""
        headers = {'Content-Type': 'application/json'}
        if self.api_key:
            headers['Authorization'] = f'Bearer {self.api_key}'
        return headers

    def _request(self, method: str, endpoint: str, data: Dict = None,
                 params: Dict = None) -> Dict[str, Any]:
        """Make API request."""
        url = f'{self.base_url}{endpoint}'

        try:
            if method == 'GET':
                response = requests.get(url, params=params, headers=self._headers(), timeout=30)
            elif method == 'POST':
                response = requests.post(url, json=data, params=params, headers=self._headers(), timeout=60)
            else:
                raise ValueError(f'Unknown method: {method}')

            return response.json()

        except requests.exceptions.Timeout:
            return {'success': False, 'error': 'Request timeout'}
        except requests.exceptions.ConnectionError:
            return {'success': False, 'error': f'Cannot connect to {self.base_url}'}
        except ValueError as e:
            return {'success': False, 'error': str(e)}

    # =========================================================================
    # Health
    # =========================================================================

    def health(self) -> Dict[str, Any]:
        """Check service health."""
        return self._request('GET', '/health')

    def is_online(self) -> bool:
        """Check if service is online."""
        result = self.health()
        return result.get('status') == 'online'

    # =========================================================================
    # Labels
    # =========================================================================

    def print_labels(self, record: Dict[str, Any], printer: str = None,
                     wait: bool = False, **layout) -> Dict[str, Any]:
        """
        Print one label per sample container of a patient record.

        Args:
            record: Patient/lab-order record
            printer: Printer name override
            wait: Wait for the print jobs and return their outcomes
            **layout: Layout overrides (page_width_dots, page_length_dots, ...)
        """
        params = dict(layout)
        if printer:
            params['printer'] = printer
        if wait:
            params['wait'] = 'true'
        return self._request('POST', '/api/labels', record, params=params)

    def preview_labels(self, record: Dict[str, Any], language: str = None, **layout) -> Dict[str, Any]:
        """Render labels to printer commands without printing."""
        params = dict(layout)
        if language:
            params['language'] = language
        return self._request('POST', '/api/labels/preview', record, params=params)

    # =========================================================================
    # Printers & Jobs
    # =========================================================================

    def list_printers(self) -> List[str]:
        """Printers known to the service host."""
        result = self._request('GET', '/api/printers')
        return result.get('printers', [])

    def selected_printer(self, printer: str = None) -> Optional[Dict[str, Any]]:
        """The printer a print request would use."""
        params = {'printer': printer} if printer else None
        result = self._request('GET', '/api/printers', params=params)
        return result.get('selected')

    def list_jobs(self, container_id: str = None, limit: int = 50) -> List[Dict[str, Any]]:
        """List recent print jobs."""
        params = {'limit': limit}
        if container_id is not None:
            params['container_id'] = container_id
        result = self._request('GET', '/api/jobs', params=params)
        return result.get('jobs', [])
