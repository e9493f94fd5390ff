import http
from abc import ABC, abstractmethod
from typing import Any, Dict

import requests

from logger import logger

# schema
from schema.base import GenericResponseModel
from modules.organization.organization_schema import OrganizationModel
from modules.zip_zone.zip_zone_schema import ZipZoneModel

# data
from data.carrier_constants import CarrierName


class CarrierInterface(ABC):
    """Books a shipment with one carrier once the selection engine picked it."""

    def __init__(self, carrier: CarrierName):
        self.carrier = carrier

    @abstractmethod
    def create_order(
        self,
        zip_zone: ZipZoneModel,
        params: Dict[str, Any],
        organization: OrganizationModel,
    ) -> GenericResponseModel:
        raise NotImplementedError


class HttpCarrierInterface(CarrierInterface):
    """
    Carrier reached through a JSON order endpoint.

    POSTs the order together with the matched zip zone rule (its sortcode,
    service and carrier options) to `<base_url>/orders`.
    """

    def __init__(self, carrier: CarrierName, base_url: str, token: str, timeout: float):
        super().__init__(carrier)
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout

    def build_body(self, zip_zone, params, organization) -> Dict[str, Any]:
        return {
            "shipper_id": organization.shipper_seq_num,
            "zipcode": zip_zone.zipcode,
            "sortcode": zip_zone.sortcode,
            "service": zip_zone.service,
            "options": zip_zone.options,
            "order": params,
        }

    def create_order(self, zip_zone, params, organization) -> GenericResponseModel:
        api_url = self.base_url + "/orders"
        body = self.build_body(zip_zone, params, organization)

        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "Authorization": "Bearer " + self.token,
        }

        logger.info(
            msg="{} create_order payload ready to post to {}".format(
                self.carrier.value, api_url
            )
        )

        try:
            response = requests.post(
                api_url, json=body, headers=headers, timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(
                msg="{} create_order request failed: {}".format(self.carrier.value, e)
            )
            return GenericResponseModel(
                status_code=http.HTTPStatus.BAD_GATEWAY,
                message="Unable to reach the carrier. Please try again later",
            )

        try:
            response_data = response.json()
        except ValueError as e:
            logger.error(
                msg="{} returned a non JSON response: {}".format(self.carrier.value, e)
            )
            return GenericResponseModel(
                status_code=http.HTTPStatus.BAD_GATEWAY,
                message="Some error occurred while creating the label, please try again",
            )

        if not response.ok:
            logger.warning(
                msg="{} rejected the order: {}".format(self.carrier.value, response_data)
            )
            return GenericResponseModel(
                status_code=http.HTTPStatus.UNPROCESSABLE_ENTITY,
                data=response_data,
                message="The carrier rejected the order",
            )

        return GenericResponseModel(
            status_code=http.HTTPStatus.CREATED,
            status=True,
            data=response_data,
            message="Order created at carrier",
        )
