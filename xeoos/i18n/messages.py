"""Localized message catalog.

Keys are the stable error/success codes used in API responses. Every entry
carries all ten supported locales.
"""

from __future__ import annotations

from xeoos.i18n.locales import get_current_locale, lang

MESSAGES: dict[str, dict[str, str]] = {
    # Generic
    "login_required": {
        "en-US": "Please log in first",
        "zh-CN": "请先登录",
        "zh-TW": "請先登入",
        "es-ES": "Por favor, inicia sesión primero",
        "fr-FR": "Veuillez vous connecter d'abord",
        "ru-RU": "Пожалуйста, сначала войдите в систему",
        "ja-JP": "先にログインしてください",
        "de-DE": "Bitte melden Sie sich zuerst an",
        "pt-BR": "Por favor, faça login primeiro",
        "ko-KR": "먼저 로그인하세요",
    },
    "unauthorized": {
        "en-US": "Unauthorized",
        "zh-CN": "未授权",
        "zh-TW": "未授權",
        "es-ES": "No autorizado",
        "fr-FR": "Non autorisé",
        "ru-RU": "Не авторизован",
        "ja-JP": "認証されていません",
        "de-DE": "Nicht autorisiert",
        "pt-BR": "Não autorizado",
        "ko-KR": "인증되지 않음",
    },
    "rate_limit_exceeded": {
        "en-US": "Too many requests, please try again later",
        "zh-CN": "请求过于频繁，请稍后再试",
        "zh-TW": "請求過於頻繁，請稍後再試",
        "es-ES": "Demasiadas solicitudes, inténtalo más tarde",
        "fr-FR": "Trop de demandes, veuillez réessayer plus tard",
        "ru-RU": "Слишком много запросов, попробуйте позже",
        "ja-JP": "リクエストが多すぎます。後でもう一度お試しください",
        "de-DE": "Zu viele Anfragen, bitte später versuchen",
        "pt-BR": "Muitas solicitações, tente novamente mais tarde",
        "ko-KR": "요청이 너무 많습니다. 나중에 다시 시도해 주세요",
    },
    "server_error": {
        "en-US": "Server error, please try again later",
        "zh-CN": "服务器错误，请稍后再试",
        "zh-TW": "伺服器錯誤，請稍後再試",
        "es-ES": "Error del servidor, inténtalo más tarde",
        "fr-FR": "Erreur du serveur, veuillez réessayer plus tard",
        "ru-RU": "Ошибка сервера, попробуйте позже",
        "ja-JP": "サーバーエラー。後でもう一度お試しください",
        "de-DE": "Server-Fehler, bitte später versuchen",
        "pt-BR": "Erro do servidor, tente novamente mais tarde",
        "ko-KR": "서버 오류입니다. 나중에 다시 시도해 주세요",
    },
    "invalid_request": {
        "en-US": "Invalid request parameters",
        "zh-CN": "请求参数无效",
        "zh-TW": "請求參數無效",
        "es-ES": "Parámetros de solicitud no válidos",
        "fr-FR": "Paramètres de requête invalides",
        "ru-RU": "Недопустимые параметры запроса",
        "ja-JP": "リクエストパラメータが無効です",
        "de-DE": "Ungültige Anfrageparameter",
        "pt-BR": "Parâmetros de solicitação inválidos",
        "ko-KR": "잘못된 요청 매개변수입니다",
    },
    "missing_id": {
        "en-US": "ID cannot be empty",
        "zh-CN": "ID不能为空",
        "zh-TW": "ID不能為空",
        "es-ES": "El ID no puede estar vacío",
        "fr-FR": "L'ID ne peut pas être vide",
        "ru-RU": "ID не может быть пустым",
        "ja-JP": "IDは空にできません",
        "de-DE": "ID darf nicht leer sein",
        "pt-BR": "O ID não pode estar vazio",
        "ko-KR": "ID는 비워둘 수 없습니다",
    },
    "missing_parameters": {
        "en-US": "Missing required parameters",
        "zh-CN": "缺少必要参数",
        "zh-TW": "缺少必要參數",
        "es-ES": "Faltan parámetros obligatorios",
        "fr-FR": "Paramètres requis manquants",
        "ru-RU": "Отсутствуют обязательные параметры",
        "ja-JP": "必須パラメータがありません",
        "de-DE": "Erforderliche Parameter fehlen",
        "pt-BR": "Parâmetros obrigatórios ausentes",
        "ko-KR": "필수 매개변수가 없습니다",
    },
    "invalid_type": {
        "en-US": "Invalid content type",
        "zh-CN": "无效的内容类型",
        "zh-TW": "無效的內容類型",
        "es-ES": "Tipo de contenido no válido",
        "fr-FR": "Type de contenu invalide",
        "ru-RU": "Недопустимый тип содержимого",
        "ja-JP": "無効なコンテンツタイプです",
        "de-DE": "Ungültiger Inhaltstyp",
        "pt-BR": "Tipo de conteúdo inválido",
        "ko-KR": "잘못된 콘텐츠 유형입니다",
    },
    # Posts
    "post_not_found": {
        "en-US": "Post not found",
        "zh-CN": "帖子不存在",
        "zh-TW": "帖子不存在",
        "es-ES": "Post no encontrado",
        "fr-FR": "Post non trouvé",
        "ru-RU": "Пост не найден",
        "ja-JP": "投稿が見つかりません",
        "de-DE": "Post nicht gefunden",
        "pt-BR": "Post não encontrado",
        "ko-KR": "게시물을 찾을 수 없습니다",
    },
    "topic_not_found": {
        "en-US": "Topic not found",
        "zh-CN": "话题不存在",
        "zh-TW": "話題不存在",
        "es-ES": "Tema no encontrado",
        "fr-FR": "Sujet non trouvé",
        "ru-RU": "Тема не найдена",
        "ja-JP": "トピックが見つかりません",
        "de-DE": "Thema nicht gefunden",
        "pt-BR": "Tópico não encontrado",
        "ko-KR": "주제를 찾을 수 없습니다",
    },
    "post_update_forbidden": {
        "en-US": "No permission to modify this post",
        "zh-CN": "无权修改该帖子",
        "zh-TW": "無權修改該帖子",
        "es-ES": "No tienes permiso para modificar este post",
        "fr-FR": "Aucune autorisation pour modifier ce post",
        "ru-RU": "Нет разрешения на изменение этого поста",
        "ja-JP": "この投稿を編集する権限がありません",
        "de-DE": "Keine Berechtigung, diesen Post zu bearbeiten",
        "pt-BR": "Sem permissão para modificar este post",
        "ko-KR": "이 게시물을 수정할 권한이 없습니다",
    },
    "post_delete_forbidden": {
        "en-US": "No permission to delete this post",
        "zh-CN": "无权删除该帖子",
        "zh-TW": "無權刪除該帖子",
        "es-ES": "No tienes permiso para eliminar este post",
        "fr-FR": "Aucune autorisation pour supprimer ce post",
        "ru-RU": "Нет разрешения на удаление этого поста",
        "ja-JP": "この投稿を削除する権限がありません",
        "de-DE": "Keine Berechtigung, diesen Post zu löschen",
        "pt-BR": "Sem permissão para deletar este post",
        "ko-KR": "이 게시물을 삭제할 권한이 없습니다",
    },
    "post_deleted": {
        "en-US": "Post deleted successfully",
        "zh-CN": "帖子删除成功",
        "zh-TW": "帖子刪除成功",
        "es-ES": "Post eliminado exitosamente",
        "fr-FR": "Post supprimé avec succès",
        "ru-RU": "Пост успешно удален",
        "ja-JP": "投稿が正常に削除されました",
        "de-DE": "Post erfolgreich gelöscht",
        "pt-BR": "Post deletado com sucesso",
        "ko-KR": "게시물이 성공적으로 삭제되었습니다",
    },
    "draft_saved": {
        "en-US": "Draft saved",
        "zh-CN": "草稿已保存",
        "zh-TW": "草稿已儲存",
        "es-ES": "Borrador guardado",
        "fr-FR": "Brouillon enregistré",
        "ru-RU": "Черновик сохранен",
        "ja-JP": "下書きを保存しました",
        "de-DE": "Entwurf gespeichert",
        "pt-BR": "Rascunho salvo",
        "ko-KR": "임시저장되었습니다",
    },
    # Replies
    "reply_not_found": {
        "en-US": "Reply not found",
        "zh-CN": "回复不存在",
        "zh-TW": "回覆不存在",
        "es-ES": "Respuesta no encontrada",
        "fr-FR": "Réponse non trouvée",
        "ru-RU": "Ответ не найден",
        "ja-JP": "返信が見つかりません",
        "de-DE": "Antwort nicht gefunden",
        "pt-BR": "Resposta não encontrada",
        "ko-KR": "답글을 찾을 수 없습니다",
    },
    "reply_target_required": {
        "en-US": "Specify the post or reply you are answering",
        "zh-CN": "请指定要回复的帖子或回复",
        "zh-TW": "請指定要回覆的帖子或回覆",
        "es-ES": "Indica el post o la respuesta a la que contestas",
        "fr-FR": "Indiquez le post ou la réponse auquel vous répondez",
        "ru-RU": "Укажите пост или ответ, на который вы отвечаете",
        "ja-JP": "返信先の投稿または返信を指定してください",
        "de-DE": "Gib den Post oder die Antwort an, auf die du antwortest",
        "pt-BR": "Indique o post ou a resposta que você está respondendo",
        "ko-KR": "답글을 달 게시물 또는 답글을 지정하세요",
    },
    "reply_delete_forbidden": {
        "en-US": "No permission to delete this reply",
        "zh-CN": "无权删除该回复",
        "zh-TW": "無權刪除該回覆",
        "es-ES": "No tienes permiso para eliminar esta respuesta",
        "fr-FR": "Aucune autorisation pour supprimer cette réponse",
        "ru-RU": "Нет разрешения на удаление этого ответа",
        "ja-JP": "この返信を削除する権限がありません",
        "de-DE": "Keine Berechtigung, diese Antwort zu löschen",
        "pt-BR": "Sem permissão para deletar esta resposta",
        "ko-KR": "이 답글을 삭제할 권한이 없습니다",
    },
    "reply_created": {
        "en-US": "Reply created successfully",
        "zh-CN": "回复成功",
        "zh-TW": "回覆成功",
        "es-ES": "Respuesta creada con éxito",
        "fr-FR": "Réponse créée avec succès",
        "ru-RU": "Ответ успешно создан",
        "ja-JP": "返信しました",
        "de-DE": "Antwort erfolgreich erstellt",
        "pt-BR": "Resposta criada com sucesso",
        "ko-KR": "답글이 작성되었습니다",
    },
    "reply_deleted": {
        "en-US": "Reply deleted successfully",
        "zh-CN": "回复删除成功",
        "zh-TW": "回覆刪除成功",
        "es-ES": "Respuesta eliminada exitosamente",
        "fr-FR": "Réponse supprimée avec succès",
        "ru-RU": "Ответ успешно удален",
        "ja-JP": "返信が正常に削除されました",
        "de-DE": "Antwort erfolgreich gelöscht",
        "pt-BR": "Resposta deletada com sucesso",
        "ko-KR": "답글이 성공적으로 삭제되었습니다",
    },
    # Likes
    "already_liked": {
        "en-US": "You have already liked this",
        "zh-CN": "您已经点过赞了",
        "zh-TW": "您已經點過讚了",
        "es-ES": "Ya te gusta esto",
        "fr-FR": "Vous avez déjà aimé ceci",
        "ru-RU": "Вы уже поставили лайк",
        "ja-JP": "すでにいいねしています",
        "de-DE": "Du hast das bereits geliked",
        "pt-BR": "Você já curtiu isto",
        "ko-KR": "이미 좋아요를 눌렀습니다",
    },
    "not_liked": {
        "en-US": "You have not liked this yet",
        "zh-CN": "您还没有点赞",
        "zh-TW": "您還沒有點讚",
        "es-ES": "Todavía no te gusta esto",
        "fr-FR": "Vous n'avez pas encore aimé ceci",
        "ru-RU": "Вы еще не ставили лайк",
        "ja-JP": "まだいいねしていません",
        "de-DE": "Du hast das noch nicht geliked",
        "pt-BR": "Você ainda não curtiu isto",
        "ko-KR": "아직 좋아요를 누르지 않았습니다",
    },
    "invalid_action": {
        "en-US": "Invalid action",
        "zh-CN": "无效的操作",
        "zh-TW": "無效的操作",
        "es-ES": "Acción no válida",
        "fr-FR": "Action invalide",
        "ru-RU": "Недопустимое действие",
        "ja-JP": "無効な操作です",
        "de-DE": "Ungültige Aktion",
        "pt-BR": "Ação inválida",
        "ko-KR": "잘못된 작업입니다",
    },
    "missing_post_id": {
        "en-US": "Post ID cannot be empty",
        "zh-CN": "帖子ID不能为空",
        "zh-TW": "帖子ID不能為空",
        "es-ES": "El ID del post no puede estar vacío",
        "fr-FR": "L'ID du post ne peut pas être vide",
        "ru-RU": "ID поста не может быть пустым",
        "ja-JP": "投稿IDは空にできません",
        "de-DE": "Post-ID darf nicht leer sein",
        "pt-BR": "O ID do post não pode estar vazio",
        "ko-KR": "게시물 ID는 비워둘 수 없습니다",
    },
    # Tasks
    "task_not_retryable": {
        "en-US": "Task does not exist or has not failed",
        "zh-CN": "任务不存在或不处于失败状态",
        "zh-TW": "任務不存在或不處於失敗狀態",
        "es-ES": "La tarea no existe o no está en estado fallido",
        "fr-FR": "La tâche n'existe pas ou n'est pas en échec",
        "ru-RU": "Задача не существует или не находится в состоянии ошибки",
        "ja-JP": "タスクが存在しないか、失敗状態ではありません",
        "de-DE": "Aufgabe existiert nicht oder ist nicht im Status 'Fehlgeschlagen'",
        "pt-BR": "A tarefa não existe ou não está com falha",
        "ko-KR": "작업이 존재하지 않거나 실패 상태가 아닙니다",
    },
    "task_forbidden": {
        "en-US": "No permission to retry this task",
        "zh-CN": "无权重试该任务",
        "zh-TW": "無權重試該任務",
        "es-ES": "No tienes permiso para reintentar esta tarea",
        "fr-FR": "Aucune autorisation pour relancer cette tâche",
        "ru-RU": "Нет разрешения на повтор этой задачи",
        "ja-JP": "このタスクを再試行する権限がありません",
        "de-DE": "Keine Berechtigung, diese Aufgabe erneut zu versuchen",
        "pt-BR": "Sem permissão para tentar esta tarefa novamente",
        "ko-KR": "이 작업을 재시도할 권한이 없습니다",
    },
    "task_not_found": {
        "en-US": "Task not found",
        "zh-CN": "任务不存在",
        "zh-TW": "任務不存在",
        "es-ES": "Tarea no encontrada",
        "fr-FR": "Tâche non trouvée",
        "ru-RU": "Задача не найдена",
        "ja-JP": "タスクが見つかりません",
        "de-DE": "Aufgabe nicht gefunden",
        "pt-BR": "Tarefa não encontrada",
        "ko-KR": "작업을 찾을 수 없습니다",
    },
    # Messages
    "notice_not_found": {
        "en-US": "Message not found",
        "zh-CN": "消息不存在",
        "zh-TW": "消息不存在",
        "es-ES": "Mensaje no encontrado",
        "fr-FR": "Message non trouvé",
        "ru-RU": "Сообщение не найдено",
        "ja-JP": "メッセージが見つかりません",
        "de-DE": "Nachricht nicht gefunden",
        "pt-BR": "Mensagem não encontrada",
        "ko-KR": "메시지를 찾을 수 없습니다",
    },
    "view_message": {
        "en-US": "View Message",
        "zh-CN": "查看消息",
        "zh-TW": "查看消息",
        "es-ES": "Ver mensaje",
        "fr-FR": "Voir le message",
        "ru-RU": "Просмотреть сообщение",
        "ja-JP": "メッセージを見る",
        "de-DE": "Nachricht anzeigen",
        "pt-BR": "Ver mensagem",
        "ko-KR": "메시지 보기",
    },
    "new_reply_title": {
        "en-US": "You have a new reply",
        "zh-CN": "您收到了新回复",
        "zh-TW": "您收到了新回覆",
        "es-ES": "Tienes una nueva respuesta",
        "fr-FR": "Vous avez une nouvelle réponse",
        "ru-RU": "У вас новый ответ",
        "ja-JP": "新しい返信があります",
        "de-DE": "Du hast eine neue Antwort",
        "pt-BR": "Você tem uma nova resposta",
        "ko-KR": "새 답글이 있습니다",
    },
    # Users
    "missing_fields": {
        "en-US": "Username, password and email cannot be empty",
        "zh-CN": "用户名、密码和邮箱不能为空",
        "zh-TW": "用戶名、密碼和郵箱不能為空",
        "es-ES": "El nombre de usuario, la contraseña y el correo electrónico no pueden estar vacíos",
        "fr-FR": "Le nom d'utilisateur, le mot de passe et l'email ne peuvent pas être vides",
        "ru-RU": "Имя пользователя, пароль и электронная почта не могут быть пустыми",
        "ja-JP": "ユーザー名、パスワード、メールアドレスは空にできません",
        "de-DE": "Benutzername, Passwort und E-Mail dürfen nicht leer sein",
        "pt-BR": "Nome de usuário, senha e email não podem estar vazios",
        "ko-KR": "사용자 이름, 비밀번호, 이메일은 비워둘 수 없습니다",
    },
    "username_length": {
        "en-US": "Username must be between 3 and 20 characters",
        "zh-CN": "用户名长度必须在3到20个字符之间",
        "zh-TW": "用戶名長度必須在3到20個字符之間",
        "es-ES": "El nombre de usuario debe tener entre 3 y 20 caracteres",
        "fr-FR": "Le nom d'utilisateur doit contenir entre 3 et 20 caractères",
        "ru-RU": "Имя пользователя должно содержать от 3 до 20 символов",
        "ja-JP": "ユーザー名は3〜20文字である必要があります",
        "de-DE": "Benutzername muss zwischen 3 und 20 Zeichen lang sein",
        "pt-BR": "O nome de usuário deve ter entre 3 e 20 caracteres",
        "ko-KR": "사용자 이름은 3~20자여야 합니다",
    },
    "password_length": {
        "en-US": "Password must be between 6 and 50 characters",
        "zh-CN": "密码长度必须在6到50个字符之间",
        "zh-TW": "密碼長度必須在6到50個字符之間",
        "es-ES": "La contraseña debe tener entre 6 y 50 caracteres",
        "fr-FR": "Le mot de passe doit contenir entre 6 et 50 caractères",
        "ru-RU": "Пароль должен содержать от 6 до 50 символов",
        "ja-JP": "パスワードは6〜50文字である必要があります",
        "de-DE": "Passwort muss zwischen 6 und 50 Zeichen lang sein",
        "pt-BR": "A senha deve ter entre 6 e 50 caracteres",
        "ko-KR": "비밀번호는 6~50자여야 합니다",
    },
    "invalid_email_format": {
        "en-US": "Invalid email format",
        "zh-CN": "邮箱格式不正确",
        "zh-TW": "郵箱格式不正確",
        "es-ES": "Formato de correo electrónico no válido",
        "fr-FR": "Format d'email invalide",
        "ru-RU": "Неверный формат электронной почты",
        "ja-JP": "メールアドレスの形式が正しくありません",
        "de-DE": "Ungültiges E-Mail-Format",
        "pt-BR": "Formato de email inválido",
        "ko-KR": "잘못된 이메일 형식입니다",
    },
    "turnstile_required": {
        "en-US": "Please complete the human verification",
        "zh-CN": "请完成人机验证",
        "zh-TW": "請完成人機驗證",
        "es-ES": "Por favor, completa la verificación humana",
        "fr-FR": "Veuillez compléter la vérification humaine",
        "ru-RU": "Пожалуйста, пройдите проверку на человека",
        "ja-JP": "人間認証を完了してください",
        "de-DE": "Bitte schließe die Verifizierung ab",
        "pt-BR": "Por favor, complete a verificação humana",
        "ko-KR": "사람 인증을 완료하세요",
    },
    "turnstile_failed": {
        "en-US": "Human verification failed, please try again",
        "zh-CN": "人机验证失败，请重试",
        "zh-TW": "人機驗證失敗，請重試",
        "es-ES": "La verificación humana falló, inténtalo de nuevo",
        "fr-FR": "La vérification humaine a échoué, veuillez réessayer",
        "ru-RU": "Проверка на человека не пройдена, попробуйте снова",
        "ja-JP": "人間認証に失敗しました。もう一度お試しください",
        "de-DE": "Verifizierung fehlgeschlagen, bitte erneut versuchen",
        "pt-BR": "A verificação humana falhou, tente novamente",
        "ko-KR": "사람 인증에 실패했습니다. 다시 시도하세요",
    },
    "verification_service_error": {
        "en-US": "Verification service error, please try again later",
        "zh-CN": "验证服务错误，请稍后再试",
        "zh-TW": "驗證服務錯誤，請稍後再試",
        "es-ES": "Error del servicio de verificación, inténtalo más tarde",
        "fr-FR": "Erreur du service de vérification, veuillez réessayer plus tard",
        "ru-RU": "Ошибка службы проверки, попробуйте позже",
        "ja-JP": "認証サービスエラー。後でもう一度お試しください",
        "de-DE": "Fehler beim Verifizierungsdienst, bitte später versuchen",
        "pt-BR": "Erro no serviço de verificação, tente novamente mais tarde",
        "ko-KR": "인증 서비스 오류입니다. 나중에 다시 시도하세요",
    },
    "username_taken": {
        "en-US": "Username already exists",
        "zh-CN": "用户名已存在",
        "zh-TW": "用戶名已存在",
        "es-ES": "El nombre de usuario ya existe",
        "fr-FR": "Le nom d'utilisateur existe déjà",
        "ru-RU": "Имя пользователя уже существует",
        "ja-JP": "ユーザー名はすでに存在します",
        "de-DE": "Benutzername existiert bereits",
        "pt-BR": "Nome de usuário já existe",
        "ko-KR": "이미 존재하는 사용자 이름입니다",
    },
    "email_taken": {
        "en-US": "Email already registered",
        "zh-CN": "邮箱已被注册",
        "zh-TW": "郵箱已被註冊",
        "es-ES": "El correo electrónico ya está registrado",
        "fr-FR": "L'email est déjà enregistré",
        "ru-RU": "Электронная почта уже зарегистрирована",
        "ja-JP": "メールアドレスはすでに登録されています",
        "de-DE": "E-Mail bereits registriert",
        "pt-BR": "Email já registrado",
        "ko-KR": "이미 등록된 이메일입니다",
    },
    "user_not_found": {
        "en-US": "User not found",
        "zh-CN": "用户不存在",
        "zh-TW": "用戶不存在",
        "es-ES": "Usuario no encontrado",
        "fr-FR": "Utilisateur non trouvé",
        "ru-RU": "Пользователь не найден",
        "ja-JP": "ユーザーが見つかりません",
        "de-DE": "Benutzer nicht gefunden",
        "pt-BR": "Usuário não encontrado",
        "ko-KR": "사용자를 찾을 수 없습니다",
    },
    "invalid_code": {
        "en-US": "Invalid verification code",
        "zh-CN": "验证码错误",
        "zh-TW": "驗證碼錯誤",
        "es-ES": "Código de verificación incorrecto",
        "fr-FR": "Code de vérification incorrect",
        "ru-RU": "Неверный код подтверждения",
        "ja-JP": "認証コードが正しくありません",
        "de-DE": "Ungültiger Bestätigungscode",
        "pt-BR": "Código de verificação inválido",
        "ko-KR": "잘못된 인증 코드입니다",
    },
    "code_missing": {
        "en-US": "Verification code expired or does not exist, please request a new one",
        "zh-CN": "验证码已过期或不存在，请重新获取",
        "zh-TW": "驗證碼已過期或不存在，請重新獲取",
        "es-ES": "Código de verificación expirado o no existe, solicita uno nuevo",
        "fr-FR": "Code de vérification expiré ou inexistant, veuillez en demander un nouveau",
        "ru-RU": "Код подтверждения истек или не существует, запросите новый",
        "ja-JP": "認証コードが期限切れまたは存在しません。新しいコードをリクエストしてください",
        "de-DE": "Bestätigungscode abgelaufen oder existiert nicht, bitte einen neuen anfordern",
        "pt-BR": "Código de verificação expirado ou não existe, solicite um novo",
        "ko-KR": "인증 코드가 만료되었거나 존재하지 않습니다. 새 코드를 요청하세요",
    },
    "code_expired": {
        "en-US": "Verification code has expired, please request a new one",
        "zh-CN": "验证码已过期，请重新获取",
        "zh-TW": "驗證碼已過期，請重新獲取",
        "es-ES": "El código de verificación ha expirado, solicita uno nuevo",
        "fr-FR": "Le code de vérification a expiré, veuillez en demander un nouveau",
        "ru-RU": "Срок действия кода истек, запросите новый",
        "ja-JP": "認証コードが期限切れです。新しいコードをリクエストしてください",
        "de-DE": "Bestätigungscode ist abgelaufen, bitte einen neuen anfordern",
        "pt-BR": "O código de verificação expirou, solicite um novo",
        "ko-KR": "인증 코드가 만료되었습니다. 새 코드를 요청하세요",
    },
    "email_verified": {
        "en-US": "Email verified successfully",
        "zh-CN": "邮箱验证成功",
        "zh-TW": "郵箱驗證成功",
        "es-ES": "Correo electrónico verificado con éxito",
        "fr-FR": "Email vérifié avec succès",
        "ru-RU": "Электронная почта успешно подтверждена",
        "ja-JP": "メールアドレスの認証に成功しました",
        "de-DE": "E-Mail erfolgreich verifiziert",
        "pt-BR": "Email verificado com sucesso",
        "ko-KR": "이메일 인증에 성공했습니다",
    },
    "invalid_credentials": {
        "en-US": "Incorrect account or password",
        "zh-CN": "账号或密码错误",
        "zh-TW": "帳號或密碼錯誤",
        "es-ES": "Cuenta o contraseña incorrecta",
        "fr-FR": "Compte ou mot de passe incorrect",
        "ru-RU": "Неверный аккаунт или пароль",
        "ja-JP": "アカウントまたはパスワードが正しくありません",
        "de-DE": "Konto oder Passwort falsch",
        "pt-BR": "Conta ou senha incorreta",
        "ko-KR": "계정 또는 비밀번호가 올바르지 않습니다",
    },
    "password_too_short": {
        "en-US": "Password is too short",
        "zh-CN": "密码太短",
        "zh-TW": "密碼太短",
        "es-ES": "La contraseña es demasiado corta",
        "fr-FR": "Le mot de passe est trop court",
        "ru-RU": "Пароль слишком короткий",
        "ja-JP": "パスワードが短すぎます",
        "de-DE": "Passwort ist zu kurz",
        "pt-BR": "A senha é muito curta",
        "ko-KR": "비밀번호가 너무 짧습니다",
    },
    "token_expired": {
        "en-US": "Login has expired, please log in again",
        "zh-CN": "登录已过期，请重新登录",
        "zh-TW": "登入已過期，請重新登入",
        "es-ES": "La sesión ha expirado, inicia sesión de nuevo",
        "fr-FR": "La session a expiré, veuillez vous reconnecter",
        "ru-RU": "Сессия истекла, войдите снова",
        "ja-JP": "ログインの有効期限が切れました。再度ログインしてください",
        "de-DE": "Anmeldung abgelaufen, bitte erneut anmelden",
        "pt-BR": "O login expirou, faça login novamente",
        "ko-KR": "로그인이 만료되었습니다. 다시 로그인하세요",
    },
    "token_invalid": {
        "en-US": "Invalid login token",
        "zh-CN": "登录凭证无效",
        "zh-TW": "登入憑證無效",
        "es-ES": "Token de inicio de sesión no válido",
        "fr-FR": "Jeton de connexion invalide",
        "ru-RU": "Недействительный токен входа",
        "ja-JP": "ログイントークンが無効です",
        "de-DE": "Ungültiges Anmeldetoken",
        "pt-BR": "Token de login inválido",
        "ko-KR": "잘못된 로그인 토큰입니다",
    },
    "nickname_required": {
        "en-US": "Nickname cannot be empty",
        "zh-CN": "昵称不能为空",
        "zh-TW": "暱稱不能為空",
        "es-ES": "El apodo no puede estar vacío",
        "fr-FR": "Le pseudo ne peut pas être vide",
        "ru-RU": "Никнейм не может быть пустым",
        "ja-JP": "ニックネームは空にできません",
        "de-DE": "Spitzname darf nicht leer sein",
        "pt-BR": "O apelido não pode estar vazio",
        "ko-KR": "닉네임은 비워둘 수 없습니다",
    },
    "field_too_long": {
        "en-US": "A field exceeds its maximum length",
        "zh-CN": "字段长度超出限制",
        "zh-TW": "字段長度超出限制",
        "es-ES": "Un campo supera su longitud máxima",
        "fr-FR": "Un champ dépasse sa longueur maximale",
        "ru-RU": "Поле превышает максимальную длину",
        "ja-JP": "項目が最大長を超えています",
        "de-DE": "Ein Feld überschreitet die maximale Länge",
        "pt-BR": "Um campo excede o comprimento máximo",
        "ko-KR": "필드가 최대 길이를 초과했습니다",
    },
    "invalid_gender": {
        "en-US": "Invalid gender value",
        "zh-CN": "无效的性别值",
        "zh-TW": "無效的性別值",
        "es-ES": "Valor de género no válido",
        "fr-FR": "Valeur de genre invalide",
        "ru-RU": "Недопустимое значение пола",
        "ja-JP": "性別の値が無効です",
        "de-DE": "Ungültiger Geschlechtswert",
        "pt-BR": "Valor de gênero inválido",
        "ko-KR": "잘못된 성별 값입니다",
    },
    "invalid_locale": {
        "en-US": "Unsupported language",
        "zh-CN": "不支持的语言",
        "zh-TW": "不支援的語言",
        "es-ES": "Idioma no compatible",
        "fr-FR": "Langue non prise en charge",
        "ru-RU": "Неподдерживаемый язык",
        "ja-JP": "サポートされていない言語です",
        "de-DE": "Nicht unterstützte Sprache",
        "pt-BR": "Idioma não suportado",
        "ko-KR": "지원되지 않는 언어입니다",
    },
    "invalid_format": {
        "en-US": "Username, password and email must be text",
        "zh-CN": "用户名、密码和邮箱必须是文本",
        "zh-TW": "使用者名稱、密碼和郵箱必須是文字",
        "es-ES": "El usuario, la contraseña y el correo deben ser texto",
        "fr-FR": "Le nom d'utilisateur, le mot de passe et l'email doivent être du texte",
        "ru-RU": "Имя пользователя, пароль и email должны быть строками",
        "ja-JP": "ユーザー名、パスワード、メールは文字列である必要があります",
        "de-DE": "Benutzername, Passwort und E-Mail müssen Text sein",
        "pt-BR": "Usuário, senha e email devem ser texto",
        "ko-KR": "사용자 이름, 비밀번호, 이메일은 텍스트여야 합니다",
    },
    # Read side
    "invalid_post_id": {
        "en-US": "Invalid post ID",
        "zh-CN": "无效的帖子ID",
        "zh-TW": "無效的貼文ID",
        "es-ES": "ID de publicación no válido",
        "fr-FR": "ID de publication invalide",
        "ru-RU": "Недопустимый ID поста",
        "ja-JP": "無効な投稿IDです",
        "de-DE": "Ungültige Beitrags-ID",
        "pt-BR": "ID de postagem inválido",
        "ko-KR": "잘못된 게시물 ID입니다",
    },
    "missing_query": {
        "en-US": "Search keyword is required",
        "zh-CN": "请输入搜索关键词",
        "zh-TW": "請輸入搜尋關鍵字",
        "es-ES": "Se requiere una palabra clave de búsqueda",
        "fr-FR": "Un mot-clé de recherche est requis",
        "ru-RU": "Требуется ключевое слово для поиска",
        "ja-JP": "検索キーワードを入力してください",
        "de-DE": "Suchbegriff ist erforderlich",
        "pt-BR": "Palavra-chave de busca é obrigatória",
        "ko-KR": "검색어를 입력하세요",
    },
    "invalid_period": {
        "en-US": "Invalid time period",
        "zh-CN": "无效的时间范围",
        "zh-TW": "無效的時間範圍",
        "es-ES": "Periodo de tiempo no válido",
        "fr-FR": "Période invalide",
        "ru-RU": "Недопустимый период",
        "ja-JP": "無効な期間です",
        "de-DE": "Ungültiger Zeitraum",
        "pt-BR": "Período inválido",
        "ko-KR": "잘못된 기간입니다",
    },
    # External services
    "email_delivery_failed": {
        "en-US": "Failed to send email, please try again later",
        "zh-CN": "邮件发送失败，请稍后再试",
        "zh-TW": "郵件發送失敗，請稍後再試",
        "es-ES": "Error al enviar el correo, inténtalo más tarde",
        "fr-FR": "Échec de l'envoi de l'email, veuillez réessayer plus tard",
        "ru-RU": "Не удалось отправить письмо, попробуйте позже",
        "ja-JP": "メールの送信に失敗しました。後でもう一度お試しください",
        "de-DE": "E-Mail konnte nicht gesendet werden, bitte später versuchen",
        "pt-BR": "Falha ao enviar email, tente novamente mais tarde",
        "ko-KR": "이메일 전송에 실패했습니다. 나중에 다시 시도하세요",
    },
    "realtime_unavailable": {
        "en-US": "Messaging service is temporarily unavailable",
        "zh-CN": "消息服务暂时不可用",
        "zh-TW": "消息服務暫時不可用",
        "es-ES": "El servicio de mensajería no está disponible temporalmente",
        "fr-FR": "Le service de messagerie est temporairement indisponible",
        "ru-RU": "Служба сообщений временно недоступна",
        "ja-JP": "メッセージサービスは一時的に利用できません",
        "de-DE": "Nachrichtendienst ist vorübergehend nicht verfügbar",
        "pt-BR": "O serviço de mensagens está temporariamente indisponível",
        "ko-KR": "메시지 서비스를 일시적으로 사용할 수 없습니다",
    },
    "search_unavailable": {
        "en-US": "Search is temporarily unavailable",
        "zh-CN": "搜索服务暂时不可用",
        "zh-TW": "搜尋服務暫時不可用",
        "es-ES": "La búsqueda no está disponible temporalmente",
        "fr-FR": "La recherche est temporairement indisponible",
        "ru-RU": "Поиск временно недоступен",
        "ja-JP": "検索は一時的に利用できません",
        "de-DE": "Suche ist vorübergehend nicht verfügbar",
        "pt-BR": "A busca está temporariamente indisponível",
        "ko-KR": "검색을 일시적으로 사용할 수 없습니다",
    },
}


def translate(code: str, locale: str | None = None, default: str | None = None) -> str:
    """Return the localized message for ``code``.

    Unknown codes return ``default`` (or the code itself) so handlers never
    fail while rendering an error. Without ``locale`` the request locale is used.
    """

    texts = MESSAGES.get(code)
    if texts is None:
        return default if default is not None else code
    return lang(texts, locale or get_current_locale())
