"""Small excerpts in the shape of the MaxMind legacy CSV dumps."""

COUNTRY_V4_CSV = """\
"1.0.0.0","1.0.0.255","16777216","16777471","AU","Australia"
"1.0.1.0","1.0.3.255","16777472","16778239","CN","China"
"""

COUNTRY_V6_CSV = """\
"2001:200::", "2001:200:ffff:ffff:ffff:ffff:ffff:ffff", "42540528726795050063891204319802818560", "42540528806023212578155541913346768895", "JP", "Japan"
"""

CITY_BLOCKS_CSV = """\
Copyright (c) 2012 MaxMind LLC.  All Rights Reserved.
startIpNum,endIpNum,locId
"16777216","16777471","17"
"16777472","16778239","49"
"""

CITY_LOCATIONS_CSV = """\
Copyright (c) 2012 MaxMind LLC.  All Rights Reserved.
locId,country,region,city,postalCode,latitude,longitude,metroCode,areaCode
1,"O1","","","",0.0000,0.0000,,
2,"AP","","","",35.0000,105.0000,,
5,"US","CA","Mountain View","94043",37.751,-122.0574,807,650
"""

CITY_V6_CSV = """\
"2001:200::","2001:200:ffff:ffff:ffff:ffff:ffff:ffff","","","JP","40","Tokyo","35.685","139.7514"
"""
