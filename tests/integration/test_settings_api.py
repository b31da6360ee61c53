"""
HTTP tests for /api/quotation-settings.
"""


class TestSettingsApi:

    def test_first_read_seeds_defaults(self, client, auth_headers, engineer):
        response = client.get('/api/quotation-settings', headers=auth_headers(engineer))

        assert response.status_code == 200
        data = response.get_json()
        assert data['company_name'] == 'SFV TECHNOLOGY'
        assert data['default_vat'] == 0
        assert data['payment_terms'] == '70% upfront, 30% on completion.'

    def test_admin_updates_known_fields(self, client, auth_headers, admin):
        response = client.put('/api/quotation-settings', json={
            'company_phone': '+234-803-000-1111',
            'default_vat': '7.5',
            'unknown_field': 'ignored',
        }, headers=auth_headers(admin))

        assert response.status_code == 200
        settings = response.get_json()['settings']
        assert settings['company_phone'] == '+234-803-000-1111'
        assert settings['default_vat'] == 7.5
        assert 'unknown_field' not in settings

    def test_invalid_percent_changes_nothing(self, client, auth_headers, admin):
        headers = auth_headers(admin)
        response = client.put('/api/quotation-settings', json={
            'company_phone': '123', 'default_discount': 'ten'
        }, headers=headers)
        assert response.status_code == 400

        data = client.get('/api/quotation-settings', headers=headers).get_json()
        assert data['company_phone'] == '+234-800-000-0000'

    def test_percent_rounded_to_stored_scale(self, client, auth_headers, admin):
        response = client.put('/api/quotation-settings', json={'default_discount': '2.34567'},
                              headers=auth_headers(admin))

        assert response.status_code == 200
        assert response.get_json()['settings']['default_discount'] == 2.346

    def test_non_admin_cannot_update(self, client, auth_headers, engineer):
        response = client.put('/api/quotation-settings', json={'default_vat': 5},
                              headers=auth_headers(engineer))
        assert response.status_code == 403
