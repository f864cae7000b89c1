# User-facing error messages, in the application's display language (Hebrew)

LOAD_MEMORIES_FAILED = "שגיאה בטעינת הזיכרונות"
ADD_MEMORY_FAILED = "שגיאה בהוספת הזיכרון"
ADD_COMMENT_FAILED = "שגיאה בהוספת התגובה"
MISSING_FIELDS = "יש למלא את כל השדות הנדרשים"
INVALID_DATE = "תאריך לא תקין"
FILE_TOO_LARGE = "הקובץ גדול מדי (מקסימום 10MB)"
IMAGES_ONLY = "רק קבצי תמונה מותרים"
MEMORY_NOT_FOUND = "הזיכרון לא נמצא"
FILE_NOT_FOUND = "הקובץ לא נמצא"
ACCESS_DENIED = "הגישה נדחתה"
SERVER_ERROR = "שגיאת שרת"
