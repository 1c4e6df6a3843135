from enum import Enum

class Collection(str, Enum):
    PROFILE = "profile"
    MUSIC = "music"
    VIDEOS = "videos"
    EVENTS = "events"
    POSTS = "posts"
    CONTACT_MESSAGES = "contactMessages"
    SOCIAL_LINKS = "socialLinks"
    SETTINGS = "settings"

class FeaturedCategory(str, Enum):
    EVENT = "event"
    POST = "post"
    MUSIC = "music"

class CurationOrder(str, Enum):
    SCAN = "scan"        # order in which the collection scan returns documents
    CURATED = "curated"  # order the admin picked them in

class StoragePath(str, Enum):
    PROFILE_PHOTOS = "profile-photos"
    MUSIC_COVERS = "music-covers"
    VIDEO_THUMBNAILS = "video-thumbnails"
    POST_IMAGES = "post-images"
    GENERAL = "general-images"

class SocialPlatform(str, Enum):
    INSTAGRAM = "instagram"
    SPOTIFY = "spotify"
    APPLE_MUSIC = "apple-music"
    LINKEDIN = "linkedin"
    YOUTUBE = "youtube"
    FACEBOOK = "facebook"
    TWITTER = "twitter"
    TIKTOK = "tiktok"
    BANDCAMP = "bandcamp"
    OTHER = "other"
