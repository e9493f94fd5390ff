import http

from modules.zip_zone import ZipZoneService
from modules.zip_zone.zip_zone_schema import ZipZoneListParamsModel


class TestZipCodesByShipper:
    def test_no_shipper_means_no_zipcodes(self, db, make_zip_zone):
        make_zip_zone()
        assert ZipZoneService.get_zip_codes_by_shipper(None) == []

    def test_distinct_shipper_zipcodes(self, db, make_zip_zone):
        make_zip_zone(zipcode="90210", shipper_id=101)
        make_zip_zone(zipcode="90210", shipper_id=101, carrier="LSO")
        make_zip_zone(zipcode="10001", shipper_id=101)
        make_zip_zone(zipcode="60601")
        make_zip_zone(zipcode="30301", shipper_id=202)

        assert ZipZoneService.get_zip_codes_by_shipper(101) == ["10001", "90210"]

    def test_response_envelope(self, db, make_zip_zone):
        make_zip_zone(zipcode="90210", shipper_id=101)

        response = ZipZoneService.get_zip_codes(101)

        assert response.status_code == http.HTTPStatus.OK
        assert response.data == {"zipcodes": ["90210"]}


class TestGetZipZones:
    def test_search_is_case_insensitive_substring(self, db, make_zip_zone):
        make_zip_zone(zipcode="90210")
        make_zip_zone(zipcode="90211")
        make_zip_zone(zipcode="10001")

        response = ZipZoneService.get_zip_zones(
            ZipZoneListParamsModel(search_word="902", carrier=["OnTrac"])
        )

        assert [zz.zipcode for zz in response.data.zipzones] == ["90210", "90211"]
        assert response.data.has_more is False

    def test_restricted_to_requested_carriers(self, db, make_zip_zone):
        make_zip_zone(carrier="OnTrac")
        make_zip_zone(carrier="LSO")

        response = ZipZoneService.get_zip_zones(ZipZoneListParamsModel(carrier=["LSO"]))

        assert [zz.carrier for zz in response.data.zipzones] == ["LSO"]

    def test_no_carriers_returns_nothing(self, db, make_zip_zone):
        make_zip_zone()

        response = ZipZoneService.get_zip_zones(ZipZoneListParamsModel())

        assert response.data.zipzones == []

    def test_pagination_reports_more_rows(self, db, make_zip_zone):
        for zipcode in ("90001", "90002", "90003"):
            make_zip_zone(zipcode=zipcode)

        first_page = ZipZoneService.get_zip_zones(
            ZipZoneListParamsModel(count=2, carrier=["OnTrac"])
        )
        second_page = ZipZoneService.get_zip_zones(
            ZipZoneListParamsModel(count=2, start=2, carrier=["OnTrac"])
        )

        assert [zz.zipcode for zz in first_page.data.zipzones] == ["90001", "90002"]
        assert first_page.data.has_more is True
        assert [zz.zipcode for zz in second_page.data.zipzones] == ["90003"]
        assert second_page.data.has_more is False


class TestGetZipZone:
    def test_found(self, db, make_zip_zone):
        zip_zone = make_zip_zone(sortcode="LAX")

        response = ZipZoneService.get_zip_zone(zip_zone.id)

        assert response.status_code == http.HTTPStatus.OK
        assert response.data.sortcode == "LAX"

    def test_missing(self, db):
        response = ZipZoneService.get_zip_zone(12345)
        assert response.status_code == http.HTTPStatus.NOT_FOUND


class TestTerminalProviders:
    def test_counts_carriers_with_two_or_more_rules(self, db, make_zip_zone):
        for zipcode in ("90001", "90002", "90003"):
            make_zip_zone(carrier="LSO", zipcode=zipcode)
        for zipcode in ("90001", "90002"):
            make_zip_zone(carrier="OnTrac", zipcode=zipcode)
        make_zip_zone(carrier="UDS")

        response = ZipZoneService.get_terminal_providers()

        assert [(p.id, p.count) for p in response.data] == [("LSO", 3), ("OnTrac", 2)]
