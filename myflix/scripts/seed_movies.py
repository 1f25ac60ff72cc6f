# myflix/scripts/seed_movies.py
import firebase_admin
from firebase_admin import credentials, firestore

from myflix.core.config import get_settings

# Sample catalogue for local development
test_movies = {
    "inception": {
        "title": "Inception",
        "description": "A thief who steals corporate secrets through dream-sharing technology is given the inverse task of planting an idea.",
        "genre": {"name": "Science Fiction", "description": "Speculative stories built on imagined science and technology."},
        "director": {"name": "Christopher Nolan", "bio": "British-American filmmaker known for non-linear storytelling."},
        "actors": ["Leonardo DiCaprio", "Joseph Gordon-Levitt", "Elliot Page"],
        "image_path": "original-images/inception.jpg",
        "featured": True
    },
    "interstellar": {
        "title": "Interstellar",
        "description": "A team of explorers travel through a wormhole in space to ensure humanity's survival.",
        "genre": {"name": "Science Fiction", "description": "Speculative stories built on imagined science and technology."},
        "director": {"name": "Christopher Nolan", "bio": "British-American filmmaker known for non-linear storytelling."},
        "actors": ["Matthew McConaughey", "Anne Hathaway", "Jessica Chastain"],
        "image_path": "original-images/interstellar.jpg",
        "featured": False
    },
    "parasite": {
        "title": "Parasite",
        "description": "Greed and class discrimination threaten the newly formed symbiotic relationship between two families.",
        "genre": {"name": "Thriller", "description": "Suspense-driven stories that keep the audience on edge."},
        "director": {"name": "Bong Joon-ho", "bio": "South Korean filmmaker and screenwriter."},
        "actors": ["Song Kang-ho", "Lee Sun-kyun", "Cho Yeo-jeong"],
        "image_path": "original-images/parasite.jpg",
        "featured": True
    }
}

def create_test_movies():
    """Create sample movies in Firestore"""
    settings = get_settings()
    creds_path = settings.FIREBASE_CREDS_PATH_ABSOLUTE
    cred = credentials.Certificate(str(creds_path)) if creds_path else credentials.ApplicationDefault()
    firebase_admin.initialize_app(cred)
    db = firestore.client()

    for movie_id, data in test_movies.items():
        try:
            db.collection('movies').document(movie_id).set(data)
            print(f"Created movie: {data['title']}")
        except Exception as e:
            print(f"Error creating movie {movie_id}: {str(e)}")

if __name__ == "__main__":
    create_test_movies()
