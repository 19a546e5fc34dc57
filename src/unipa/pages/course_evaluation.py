"""CourseEvaluationPage - course evaluation answer page (授業評価回答)."""

from src.unipa.contracts import NotImplementedExtractor


class CourseEvaluationExtractor(NotImplementedExtractor):
    PAGE_TYPE = "course_evaluation"
    OPERATION = "Course evaluation parsing"
