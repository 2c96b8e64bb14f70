import logging
import uuid
from datetime import datetime, timezone
from database import db, Feedback

logger = logging.getLogger(__name__)

FEEDBACK_VALUES = ('like', 'dislike')

class FeedbackRecorder:
    def record(self, feedback, message_content, user_id='anonymous', detailed_feedback=''):
        """
        Stores a like/dislike on an assistant answer.
        """
        if not feedback or not message_content:
            raise ValueError("Missing required fields")
        if feedback not in FEEDBACK_VALUES:
            raise ValueError(f"Feedback must be one of {', '.join(FEEDBACK_VALUES)}")

        entry = Feedback(
            id=str(uuid.uuid4()),
            ts=datetime.now(timezone.utc),
            feedback=feedback,
            message_content=message_content,
            detailed_feedback=detailed_feedback or '',
            user_id=user_id or 'anonymous'
        )
        db.session.add(entry)
        db.session.commit()

        logger.info("Recorded %s feedback %s from %s", feedback, entry.id, entry.user_id)
        return self._to_dict(entry)

    def list_feedback(self, limit=50):
        entries = Feedback.query.order_by(Feedback.ts.desc()).limit(limit).all()
        return [self._to_dict(e) for e in entries]

    def _to_dict(self, entry):
        return {
            "id": entry.id,
            "timestamp": entry.ts.isoformat() if entry.ts else None,
            "feedback": entry.feedback,
            "messageContent": entry.message_content,
            "detailedFeedback": entry.detailed_feedback,
            "userId": entry.user_id
        }
