"""StudyShare: college note-sharing API."""
