"""
Mock TMDB API responses for testing.

Contains realistic responses from the TMDB API for the catalogue endpoints
(lists, details, enrichment facets, taxonomies and per-entity lookups).
These fixtures are used with respx or with the stub catalogue client.
"""

IMAGE_BASE_URL = "https://image.tmdb.org/t/p/"

# GET /configuration
TMDB_CONFIGURATION_RESPONSE = {
    "images": {
        "base_url": "http://image.tmdb.org/t/p/",
        "secure_base_url": IMAGE_BASE_URL,
        "backdrop_sizes": ["w300", "w780", "w1280", "original"],
        "poster_sizes": ["w92", "w154", "w185", "w342", "w500", "w780", "original"],
        "profile_sizes": ["w45", "w185", "h632", "original"],
    },
    "change_keys": ["adult", "air_date", "also_known_as"],
}

# GET /genre/movie/list
TMDB_MOVIE_GENRES_RESPONSE = {
    "genres": [
        {"id": 28, "name": "Action"},
        {"id": 12, "name": "Adventure"},
        {"id": 18, "name": "Drama"},
        {"id": 878, "name": "Science Fiction"},
    ]
}

# GET /genre/tv/list
TMDB_TV_GENRES_RESPONSE = {
    "genres": [
        {"id": 18, "name": "Drama"},
        {"id": 10765, "name": "Sci-Fi & Fantasy"},
    ]
}

# GET /configuration/languages
TMDB_LANGUAGES_RESPONSE = [
    {"iso_639_1": "en", "english_name": "English", "name": "English"},
    {"iso_639_1": "fr", "english_name": "French", "name": "Français"},
]

# GET /configuration/countries
TMDB_COUNTRIES_RESPONSE = [
    {"iso_3166_1": "US", "english_name": "United States of America"},
    {"iso_3166_1": "FR", "english_name": "France"},
]

# GET /movie/popular?page=1
TMDB_POPULAR_MOVIES_RESPONSE = {
    "page": 1,
    "results": [
        {
            "adult": False,
            "backdrop_path": "/8ZTVqvKDQ8emSGUEMjsS4yHAwrp.jpg",
            "genre_ids": [28],
            "id": 27205,
            "original_language": "en",
            "original_title": "Inception",
            "overview": "Cobb, a skilled thief...",
            "popularity": 83.95,
            "poster_path": "/oYuLEt3zVCKq57qu2F8dT7NIa6f.jpg",
            "release_date": "2010-07-15",
            "title": "Inception",
            "vote_average": 8.4,
            "vote_count": 35000,
        },
        {
            "adult": False,
            "backdrop_path": None,
            "genre_ids": [28],
            "id": 155,
            "original_language": "en",
            "original_title": "The Dark Knight",
            "overview": "Batman raises the stakes...",
            "popularity": 75.2,
            "poster_path": "/qJ2tW6WMUDux911r6m7haRef0WH.jpg",
            "release_date": "2008-07-16",
            "title": "The Dark Knight",
            "vote_average": 8.5,
            "vote_count": 31000,
        },
    ],
    "total_pages": 10,
    "total_results": 200,
}

# GET /movie/top_rated?page=1
TMDB_TOP_RATED_MOVIES_RESPONSE = {
    "page": 1,
    "results": [
        {
            "genre_ids": [18],
            "id": 278,
            "original_title": "The Shawshank Redemption",
            "poster_path": "/q6y0Go1tsGEsmtFryDOJo3dEmqu.jpg",
            "release_date": "1994-09-23",
            "title": "The Shawshank Redemption",
            "vote_average": 8.7,
        }
    ],
    "total_pages": 3,
    "total_results": 60,
}

# GET /tv/airing_today?page=1
TMDB_AIRING_TODAY_RESPONSE = {
    "page": 1,
    "results": [
        {
            "first_air_date": "2008-01-20",
            "genre_ids": [18],
            "id": 1396,
            "name": "Breaking Bad",
            "original_name": "Breaking Bad",
            "poster_path": "/ztkUQFLlC19CCMYHW9o1zWhJRNq.jpg",
            "vote_average": 8.9,
        }
    ],
    "total_pages": 1,
    "total_results": 1,
}

# Any page without results (search for an unknown title, page past the end...)
TMDB_EMPTY_PAGE_RESPONSE = {
    "page": 1,
    "results": [],
    "total_pages": 0,
    "total_results": 0,
}

# GET /movie/27205
TMDB_MOVIE_DETAILS_RESPONSE = {
    "id": 27205,
    "title": "Inception",
    "original_title": "Inception",
    "overview": "Cobb, a skilled thief...",
    "release_date": "2010-07-15",
    "runtime": 148,
    "genres": [
        {"id": 28, "name": "Action"},
        {"id": 878, "name": "Science Fiction"},
    ],
    "poster_path": "/oYuLEt3zVCKq57qu2F8dT7NIa6f.jpg",
    "backdrop_path": "/8ZTVqvKDQ8emSGUEMjsS4yHAwrp.jpg",
    "belongs_to_collection": None,
    "vote_average": 8.4,
}

# GET /movie/27205/credits
TMDB_CREDITS_RESPONSE = {
    "id": 27205,
    "cast": [
        {
            "id": 6193 + index,
            "name": f"Actor {index}",
            "character": f"Character {index}",
            "profile_path": f"/actor{index}.jpg" if index % 2 == 0 else None,
        }
        for index in range(12)
    ],
    "crew": [
        {"id": 525, "name": "Christopher Nolan", "job": "Director", "profile_path": "/nolan.jpg"},
        {"id": 525, "name": "Christopher Nolan", "job": "Screenplay", "profile_path": "/nolan.jpg"},
        {"id": 556, "name": "Emma Thomas", "job": "Producer", "profile_path": None},
        {"id": 947, "name": "Hans Zimmer", "job": "Original Music Composer", "profile_path": None},
        {"id": 559, "name": "Wally Pfister", "job": "Director of Photography", "profile_path": None},
    ],
}

# GET /movie/27205/videos
TMDB_VIDEOS_RESPONSE = {
    "id": 27205,
    "results": [
        {"key": "YoHD9XEInc0", "name": "Official Trailer", "site": "YouTube", "type": "Trailer"},
        {"key": "123456", "name": "Teaser", "site": "Vimeo", "type": "Teaser"},
        {"key": "8hP9D6kZseM", "name": "Featurette", "site": "YouTube", "type": "Featurette"},
    ],
}

# GET /movie/27205/images
TMDB_IMAGES_RESPONSE = {
    "id": 27205,
    "backdrops": [{"file_path": f"/backdrop{index}.jpg"} for index in range(7)],
    "posters": [{"file_path": f"/poster{index}.jpg"} for index in range(3)],
}

# GET /movie/27205/similar?page=1
TMDB_SIMILAR_RESPONSE = {
    "page": 1,
    "results": [
        {
            "id": 1000 + index,
            "title": f"Similar {index}",
            "poster_path": f"/similar{index}.jpg",
            "release_date": f"20{10 + index}-01-01",
            "vote_average": 7.0,
            "genre_ids": [28],
        }
        for index in range(8)
    ],
    "total_pages": 2,
    "total_results": 40,
}

# GET /person/525
TMDB_PERSON_RESPONSE = {
    "id": 525,
    "name": "Christopher Nolan",
    "biography": "British-American filmmaker...",
    "birthday": "1970-07-30",
    "profile_path": "/xuAIuYSmsUzKlUMBFGVZaWsY3DZ.jpg",
}

# GET /person/525/movie_credits
TMDB_PERSON_MOVIE_CREDITS_RESPONSE = {
    "id": 525,
    "cast": [],
    "crew": [
        {"id": 155, "title": "The Dark Knight", "release_date": "2008-07-16", "job": "Director", "genre_ids": [28]},
        {"id": 999, "title": "Untitled Project", "release_date": "", "job": "Director", "genre_ids": []},
        {"id": 872585, "title": "Oppenheimer", "release_date": "2023-07-19", "job": "Director", "genre_ids": [18]},
        {"id": 27205, "title": "Inception", "release_date": "2010-07-15", "job": "Director", "genre_ids": [28]},
    ],
}

# GET /collection/263
TMDB_COLLECTION_RESPONSE = {
    "id": 263,
    "name": "The Dark Knight Collection",
    "poster_path": "/bqS2lMgGkuodIXtDILFWTSWDDpa.jpg",
    "backdrop_path": "/xfKot7lqaiW4XpL5TtDlVBA9ei9.jpg",
    "parts": [
        {"id": 49026, "title": "The Dark Knight Rises", "release_date": "2012-07-17", "genre_ids": [28]},
        {"id": 272, "title": "Batman Begins", "release_date": "2005-06-10", "genre_ids": [28]},
        {"id": 155, "title": "The Dark Knight", "release_date": "2008-07-16", "genre_ids": [28]},
    ],
}

# GET /movie/27205/keywords
TMDB_MOVIE_KEYWORDS_RESPONSE = {
    "id": 27205,
    "keywords": [
        {"id": 1014, "name": "loss of loved one"},
        {"id": 2343, "name": "dream"},
    ],
}

# GET /tv/1396/keywords
TMDB_TV_KEYWORDS_RESPONSE = {
    "id": 1396,
    "results": [{"id": 2231, "name": "drug dealer"}],
}

# GET /company/923
TMDB_COMPANY_RESPONSE = {
    "id": 923,
    "name": "Legendary Pictures",
    "headquarters": "Burbank, California, USA",
    "logo_path": "/8M99Dkt23MjQMTTWukq4m5XsEuo.png",
    "origin_country": "US",
}
