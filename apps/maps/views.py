"""
Views for the Maps app.

Public proxies to Google Maps so the browser never sees the API key.
"""
import logging

from django.http import HttpResponse
from rest_framework import serializers
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.maps.services.google_maps import GoogleMapsClient, filter_hotels, sort_hotels

logger = logging.getLogger(__name__)


class CommaSeparatedIntegerField(serializers.CharField):
    """Parses ``"1,2,3"`` into ``[1, 2, 3]``."""
    default_error_messages = {
        'invalid_list': 'Enter comma-separated whole numbers.',
    }

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        try:
            return [int(part) for part in value.split(',') if part.strip()]
        except ValueError:
            self.fail('invalid_list')


class HotelSearchQuerySerializer(serializers.Serializer):
    city = serializers.CharField(required=False, allow_blank=True)
    query = serializers.CharField(required=False, allow_blank=True)
    minRating = serializers.FloatField(required=False, min_value=0, max_value=5)
    priceLevels = CommaSeparatedIntegerField(required=False, allow_blank=True)
    radiusMiles = serializers.FloatField(required=False, min_value=0)
    lat = serializers.FloatField(required=False, min_value=-90, max_value=90)
    lng = serializers.FloatField(required=False, min_value=-180, max_value=180)
    sort = serializers.ChoiceField(choices=['rating', 'price', 'distance'], required=False)


class AutocompleteView(APIView):
    """
    City autocomplete.

    GET /api/maps/autocomplete/?query=lis&sessionToken=<token>
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request):
        client = GoogleMapsClient()
        result = client.autocomplete_cities(
            request.query_params.get('query'),
            session_token=(request.query_params.get('sessionToken') or '').strip() or None,
        )
        return Response({'success': True, **result})


class PlaceDetailsView(APIView):
    """
    Name, address and coordinates of a place.

    GET /api/maps/place/?placeId=<id>
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request):
        client = GoogleMapsClient()
        place_id = (request.query_params.get('placeId') or '').strip()
        if not place_id:
            raise ValidationError({'placeId': ['Missing placeId.']})
        return Response({'success': True, **client.place_details(place_id)})


class HotelSearchView(APIView):
    """
    Hotels in a city from Places Text Search.

    GET /api/maps/hotels/?city=Lisbon&minRating=4&priceLevels=1,2
        &lat=38.72&lng=-9.14&radiusMiles=3&sort=distance
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request):
        client = GoogleMapsClient()
        serializer = HotelSearchQuerySerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        params = serializer.validated_data

        text_query = (params.get('query') or '').strip() or (params.get('city') or '').strip()
        if not text_query:
            raise ValidationError({'city': ['Missing city or query.']})

        result = client.search_hotels(text_query)
        if result.get('error'):
            return Response({'success': True, **result})

        origin = None
        if params.get('lat') is not None and params.get('lng') is not None:
            origin = (params['lat'], params['lng'])

        hotels = filter_hotels(
            result['hotels'],
            min_rating=params.get('minRating'),
            price_levels=params.get('priceLevels') or None,
            origin=origin,
            radius_miles=params.get('radiusMiles'),
        )
        return Response({'success': True, 'hotels': sort_hotels(hotels, params.get('sort'))})


class StaticMapView(APIView):
    """
    Static map PNG centred on a point.

    GET /api/maps/static/?lat=38.72&lng=-9.14&zoom=13&path=<encoded polyline>
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request):
        client = GoogleMapsClient()
        lat = request.query_params.get('lat')
        lng = request.query_params.get('lng')
        if not lat or not lng:
            raise ValidationError({'coordinates': ['Missing coordinates.']})

        content = client.static_map(
            lat,
            lng,
            zoom=request.query_params.get('zoom') or '13',
            path=request.query_params.get('path') or None,
        )
        response = HttpResponse(content, content_type='image/png')
        response['Cache-Control'] = 'public, max-age=600'
        return response
