"""
Supplier-shaped fixtures served by StubHotelSupplierGateway.

Booking codes and confirmation numbers carry markers (a marker may also be
appended to a fixture code, e.g. LUX5STAR001-FAIL) that switch the stub
into a specific behaviour:

- PRICECHANGE: pre-book returns a lower offered price and IsPriceChanged
- UNAVAILABLE: pre-book rejects with 'Room no longer available'
- FAIL: book rejects with HTTP 400
- TIMEOUT: the call times out (book still creates the booking)
- NOTFOUND: booking lookups answer 404
- NONCANCELLABLE: cancel rejects with CANCELLATION_NOT_ALLOWED
"""

LUXURY_HOTEL = {
    "BookingCode": "LUX5STAR001",
    "HotelCode": "TAJ001",
    "HotelName": "The Grand Palace Hotel",
    "StarRating": 5,
    "HotelAddress": "123 Marine Drive, Colaba",
    "HotelContactNo": "+91-22-6665-3366",
    "CityName": "Mumbai",
    "CountryName": "India",
    "Price": {
        "CurrencyCode": "USD",
        "RoomPrice": 280,
        "Tax": 50,
        "ExtraGuestCharge": 0,
        "ChildCharge": 0,
        "OtherCharges": 10,
        "Discount": 0,
        "PublishedPrice": 340,
        "OfferedPrice": 340,
        "AgentCommission": 34,
        "AgentMarkUp": 0,
    },
    "Refundable": True,
    "MealType": "Breakfast Included",
    "RoomType": "Deluxe King Room with Sea View",
    "AvailableRooms": 5,
    "Amenities": ["Free WiFi", "Swimming Pool", "Spa", "Fitness Center", "Restaurant", "Bar", "Room Service"],
    "HotelPicture": "https://example.com/hotels/taj001/main.jpg",
    "HotelImages": [
        "https://example.com/hotels/taj001/room1.jpg",
        "https://example.com/hotels/taj001/pool.jpg",
    ],
}

BUSINESS_HOTEL = {
    "BookingCode": "BUS4STAR001-PRICECHANGE",
    "HotelCode": "HYATT001",
    "HotelName": "City Center Business Hotel",
    "StarRating": 4,
    "HotelAddress": "45 Nariman Point",
    "HotelContactNo": "+91-22-6630-1234",
    "CityName": "Mumbai",
    "CountryName": "India",
    "Price": {
        "CurrencyCode": "USD",
        "RoomPrice": 175,
        "Tax": 30,
        "ExtraGuestCharge": 0,
        "ChildCharge": 0,
        "OtherCharges": 5,
        "Discount": 0,
        "PublishedPrice": 210,
        "OfferedPrice": 210,
        "AgentCommission": 21,
        "AgentMarkUp": 0,
    },
    "Refundable": True,
    "MealType": "Breakfast Included",
    "RoomType": "Executive Queen Room",
    "AvailableRooms": 8,
    "Amenities": ["Free WiFi", "Business Center", "Fitness Center", "Restaurant"],
    "HotelPicture": "https://example.com/hotels/hyatt001/main.jpg",
    "HotelImages": ["https://example.com/hotels/hyatt001/room.jpg"],
}

BUDGET_HOTEL = {
    "BookingCode": "BUD3STAR001",
    "HotelCode": "IBIS001",
    "HotelName": "Comfort Inn Express",
    "StarRating": 3,
    "HotelAddress": "12 Andheri East",
    "HotelContactNo": "+91-22-6789-0000",
    "CityName": "Mumbai",
    "CountryName": "India",
    "Price": {
        "CurrencyCode": "USD",
        "RoomPrice": 70,
        "Tax": 10,
        "ExtraGuestCharge": 0,
        "ChildCharge": 0,
        "OtherCharges": 5,
        "Discount": 5,
        "PublishedPrice": 85,
        "OfferedPrice": 80,
        "AgentCommission": 8,
        "AgentMarkUp": 0,
    },
    "Refundable": False,
    "MealType": "Room Only",
    "RoomType": "Standard Double Room",
    "AvailableRooms": 12,
    "Amenities": ["Free WiFi", "24-hour Front Desk"],
    "HotelPicture": "https://example.com/hotels/ibis001/main.jpg",
    "HotelImages": [],
}

BOUTIQUE_HOTEL = {
    "BookingCode": "BTQ4STAR001",
    "HotelCode": "BOUTIQUE001",
    "HotelName": "Heritage Boutique Suites",
    "StarRating": 4,
    "HotelAddress": "8 Kala Ghoda",
    "HotelContactNo": "+91-22-6611-2200",
    "CityName": "Mumbai",
    "CountryName": "India",
    "Price": {
        "CurrencyCode": "USD",
        "RoomPrice": 185,
        "Tax": 30,
        "ExtraGuestCharge": 0,
        "ChildCharge": 0,
        "OtherCharges": 5,
        "Discount": 0,
        "PublishedPrice": 220,
        "OfferedPrice": 220,
        "AgentCommission": 22,
        "AgentMarkUp": 0,
    },
    "Refundable": True,
    "MealType": "Half Board",
    "RoomType": "Heritage Suite",
    "AvailableRooms": 3,
    "Amenities": ["Free WiFi", "Library", "Restaurant"],
    "HotelPicture": "https://example.com/hotels/boutique001/main.jpg",
    "HotelImages": [],
}

RESORT_HOTEL = {
    "BookingCode": "RESORT5STAR001-UNAVAILABLE",
    "HotelCode": "RESORT001",
    "HotelName": "Tropical Paradise Resort & Spa",
    "StarRating": 5,
    "HotelAddress": "Juhu Beach Road",
    "HotelContactNo": "+91-22-6700-5500",
    "CityName": "Mumbai",
    "CountryName": "India",
    "Price": {
        "CurrencyCode": "USD",
        "RoomPrice": 340,
        "Tax": 60,
        "ExtraGuestCharge": 0,
        "ChildCharge": 0,
        "OtherCharges": 20,
        "Discount": 30,
        "PublishedPrice": 420,
        "OfferedPrice": 390,
        "AgentCommission": 39,
        "AgentMarkUp": 0,
    },
    "Refundable": True,
    "MealType": "All Inclusive",
    "RoomType": "Beachfront Villa",
    "AvailableRooms": 1,
    "Amenities": ["Private Beach", "Spa", "Swimming Pool", "Kids Club"],
    "HotelPicture": "https://example.com/hotels/resort001/main.jpg",
    "HotelImages": [],
}

AIRPORT_HOTEL = {
    "BookingCode": "AIRPORT3STAR001-TIMEOUT",
    "HotelCode": "AIRPORT001",
    "HotelName": "Airport Transit Hotel",
    "StarRating": 3,
    "HotelAddress": "Sahar Airport Road",
    "HotelContactNo": "+91-22-6655-4400",
    "CityName": "Mumbai",
    "CountryName": "India",
    "Price": {
        "CurrencyCode": "USD",
        "RoomPrice": 95,
        "Tax": 15,
        "ExtraGuestCharge": 0,
        "ChildCharge": 0,
        "OtherCharges": 5,
        "Discount": 0,
        "PublishedPrice": 115,
        "OfferedPrice": 115,
        "AgentCommission": 11,
        "AgentMarkUp": 0,
    },
    "Refundable": True,
    "MealType": "Breakfast Included",
    "RoomType": "Standard Twin Room",
    "AvailableRooms": 20,
    "Amenities": ["Free WiFi", "Airport Shuttle"],
    "HotelPicture": "https://example.com/hotels/airport001/main.jpg",
    "HotelImages": [],
}

HOTELS = [LUXURY_HOTEL, BUSINESS_HOTEL, BUDGET_HOTEL, BOUTIQUE_HOTEL, RESORT_HOTEL, AIRPORT_HOTEL]

# Offered price returned by pre-book for PRICECHANGE codes
CHANGED_OFFERED_PRICE = 200

LUXURY_HOTEL_DETAILS = {
    "HotelCode": "TAJ001",
    "HotelName": "The Grand Palace Hotel",
    "StarRating": 5,
    "Description": "An iconic landmark overlooking the Arabian Sea, in the heart of Mumbai.",
    "HotelFacilities": ["Swimming Pool", "Spa & Wellness Center", "Fitness Center", "Business Center"],
    "Attractions": [
        {"Key": "Gateway of India", "Value": "0.5 km"},
        {"Key": "Colaba Causeway", "Value": "0.8 km"},
    ],
    "HotelPolicy": {
        "CheckInTime": "14:00",
        "CheckOutTime": "12:00",
        "CancellationPolicy": "Free cancellation up to 48 hours before check-in.",
    },
    "Images": ["https://example.com/hotels/taj001/exterior.jpg"],
    "Address": "123 Marine Drive, Colaba, Mumbai",
    "PinCode": "400001",
    "CityName": "Mumbai",
    "CountryName": "India",
    "PhoneNumber": "+91-22-6665-3366",
    "FaxNumber": "+91-22-6665-3367",
    "Map": {"Latitude": 18.9220, "Longitude": 72.8347},
}

BUDGET_HOTEL_DETAILS = {
    "HotelCode": "IBIS001",
    "HotelName": "Comfort Inn Express",
    "StarRating": 3,
    "Description": "Simple, comfortable rooms close to the airport.",
    "HotelFacilities": ["24-hour Front Desk", "Free WiFi"],
    "Attractions": [],
    "HotelPolicy": {
        "CheckInTime": "14:00",
        "CheckOutTime": "11:00",
        "CancellationPolicy": "Non-refundable.",
    },
    "Images": [],
    "Address": "12 Andheri East, Mumbai",
    "PinCode": "400069",
    "CityName": "Mumbai",
    "CountryName": "India",
    "PhoneNumber": "+91-22-6789-0000",
    "FaxNumber": "",
    "Map": {"Latitude": 19.1136, "Longitude": 72.8697},
}

HOTEL_DETAILS = {
    "TAJ001": LUXURY_HOTEL_DETAILS,
    "IBIS001": BUDGET_HOTEL_DETAILS,
}

BOOKINGS = [
    {
        "ConfirmationNo": "CONF-2024-001234",
        "BookingRefNo": "TBO-REF-567890",
        "BookingId": 123456,
        "BookingStatus": "Confirmed",
        "HotelName": "The Grand Palace Hotel",
        "CheckInDate": "2024-03-15",
        "CheckOutDate": "2024-03-18",
        "TotalFare": 1020,
        "CurrencyCode": "USD",
        "GuestDetails": [
            {
                "CustomerNames": [
                    {"Title": "Mr", "FirstName": "John", "LastName": "Doe", "Type": "Adult"},
                    {"Title": "Mrs", "FirstName": "Jane", "LastName": "Doe", "Type": "Adult"},
                ]
            }
        ],
        "BookedOn": "2024-03-01T10:30:00",
        "VoucherUrl": "https://example.com/vouchers/CONF-2024-001234.pdf",
    },
    {
        "ConfirmationNo": "CONF-2024-001235",
        "BookingRefNo": "TBO-REF-567891",
        "BookingId": 123457,
        "BookingStatus": "Confirmed",
        "HotelName": "Tropical Paradise Resort & Spa",
        "CheckInDate": "2024-04-10",
        "CheckOutDate": "2024-04-15",
        "TotalFare": 1950,
        "CurrencyCode": "USD",
        "GuestDetails": [
            {"CustomerNames": [{"Title": "Mr", "FirstName": "Raj", "LastName": "Mehta", "Type": "Adult"}]}
        ],
        "BookedOn": "2024-03-20T09:00:00",
    },
    {
        "ConfirmationNo": "CONF-2024-001200",
        "BookingRefNo": "TBO-REF-567850",
        "BookingId": 123400,
        "BookingStatus": "Cancelled",
        "HotelName": "City Center Business Hotel",
        "CheckInDate": "2024-02-20",
        "CheckOutDate": "2024-02-22",
        "TotalFare": 364,
        "CurrencyCode": "USD",
        "GuestDetails": [
            {"CustomerNames": [{"Title": "Ms", "FirstName": "Sarah", "LastName": "Smith", "Type": "Adult"}]}
        ],
        "BookedOn": "2024-02-10T14:20:00",
    },
    {
        "ConfirmationNo": "CONF-2024-001300",
        "BookingRefNo": "TBO-REF-567900",
        "BookingId": 123500,
        "BookingStatus": "Vouchered",
        "HotelName": "Heritage Boutique Suites",
        "CheckInDate": "2024-06-10",
        "CheckOutDate": "2024-06-12",
        "TotalFare": 440,
        "CurrencyCode": "USD",
        "GuestDetails": [
            {"CustomerNames": [{"Title": "Dr", "FirstName": "Anita", "LastName": "Rao", "Type": "Adult"}]}
        ],
        "BookedOn": "2024-05-01T08:15:00",
    },
    {
        "ConfirmationNo": "NONCANCELLABLE-001",
        "BookingRefNo": "TBO-REF-NC0001",
        "BookingId": 123600,
        "BookingStatus": "Confirmed",
        "HotelName": "Comfort Inn Express",
        "CheckInDate": "2024-06-05",
        "CheckOutDate": "2024-06-07",
        "TotalFare": 160,
        "CurrencyCode": "USD",
        "GuestDetails": [
            {"CustomerNames": [{"Title": "Mr", "FirstName": "Sam", "LastName": "Lee", "Type": "Adult"}]}
        ],
        "BookedOn": "2024-05-20T16:45:00",
    },
]
