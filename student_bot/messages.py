import logging

from .language import DEFAULT_LANGUAGE

logger = logging.getLogger(__name__)

CONTACT_EMAIL = "info@academiesapienceuniverselle.org"

MESSAGES = {
    "welcome": {
        "fr": "🔐 Veuillez entrer votre identifiant étudiant pour continuer.",
        "ht": "🔐 Tanpri antre ID elèv ou pou kontinye.",
        "en": "🔐 Please enter your student ID to continue.",
    },
    "auth_success": {
        "fr": "✅ Bonjour {name}. Comment puis-je vous aider aujourd'hui ?",
        "ht": "✅ Bonjou {name}. Kijan mwen ka ede w jodi a ?",
        "en": "✅ Hello {name}. How can I help you today?",
    },
    "auth_fail": {
        "fr": "⛔ Identifiant invalide. Veuillez réessayer.",
        "ht": "⛔ ID pa valab. Tanpri eseye ankò.",
        "en": "⛔ Invalid ID. Please try again.",
    },
    "email_prompt": {
        "fr": "📧 Veuillez entrer votre email pour recevoir les notifications :",
        "ht": "📧 Tanpri antre imel ou pou resevwa notifikasyon :",
        "en": "📧 Please enter your email to receive notifications:",
    },
    "email_saved": {
        "fr": "✅ Votre email a été enregistré.",
        "ht": "✅ Imel ou anrejistre.",
        "en": "✅ Your email has been saved.",
    },
    "restricted": {
        "fr": "⚠️ Sujets spirituels interdits ici.",
        "ht": "⚠️ Sijè espirityèl pa pèmèt isit.",
        "en": "⚠️ Spiritual topics are not allowed here.",
    },
    "fallback": {
        "fr": "❓ Aucune réponse disponible. Essayez autre chose.",
        "ht": "❓ Pa gen repons. Tanpri eseye ankò.",
        "en": "❓ No response found. Try something else.",
    },
    "error": {
        "fr": "❌ Erreur technique. Veuillez réessayer plus tard.",
        "ht": "❌ Erè teknik. Tanpri eseye pita.",
        "en": "❌ Technical error. Please try again later.",
    },
    "muted": {
        "fr": "⏳ Veuillez patienter un moment.",
        "ht": "⏳ Tanpri tann yon ti moman.",
        "en": "⏳ Please wait a moment.",
    },
    "rate_limited": {
        "fr": "⛔ Vous envoyez des messages trop rapidement.",
        "ht": "⛔ W ap voye mesaj twò vit.",
        "en": "⛔ You're sending messages too quickly.",
    },
    "certificate_found": {
        "fr": "📎 Voici votre certificat : {link}",
        "ht": "📎 Men sètifika ou : {link}",
        "en": "📎 Here is your certificate: {link}",
    },
    "certificate_missing": {
        "fr": (
            "❗ *Aucun certificat trouvé pour votre identifiant.*\n\n"
            "*Demande de Certificat*\n\n"
            "1. *Vérifiez votre éligibilité*\n"
            "2. *Soumettez une demande à* {email}\n"
            "3. *Délai :* 7 jours ouvrables"
        ),
        "ht": (
            "❗ *Pa gen sètifika jwenn pou ID ou a.*\n\n"
            "*Demann pou Sètifika*\n\n"
            "1. *Verifye kalifikasyon ou*\n"
            "2. *Voye demann nan* {email}\n"
            "3. *Tretman :* 7 jou travay"
        ),
        "en": (
            "❗ *No certificate found for your ID.*\n\n"
            "*Requesting Your Certificate*\n\n"
            "1. *Check eligibility*\n"
            "2. *Send request to* {email}\n"
            "3. *Processing:* 7 business days"
        ),
    },
    "resource": {
        "fr": "📎 Voici votre {name} : {link}",
        "ht": "📎 Men {name} ou : {link}",
        "en": "📎 Here is your {name}: {link}",
    },
    "resource_missing": {
        "fr": "❗ Le document {name} n'est pas encore disponible.",
        "ht": "❗ Dokiman {name} an poko disponib.",
        "en": "❗ The {name} document is not available yet.",
    },
    "dates": {
        "fr": "📅 {title} :\n{dates}",
        "ht": "📅 {title} :\n{dates}",
        "en": "📅 {title}:\n{dates}",
    },
    "dates_missing": {
        "fr": "📅 Les dates ne sont pas encore publiées.",
        "ht": "📅 Dat yo poko pibliye.",
        "en": "📅 The dates have not been published yet.",
    },
    "language_prompt": {
        "en": "🌍 Choose your language / Chwazi lang ou / Choisissez votre langue:",
    },
    "language_set": {
        "fr": "✅ Langue définie sur {label}.",
        "ht": "✅ Lang lan chanje pou {label}.",
        "en": "✅ Language set to {label}.",
    },
    "file_received": {
        "fr": "✅ Fichier reçu. Nous l'examinerons bientôt.",
        "ht": "✅ Nou resevwa fichye a. N ap revize l byento.",
        "en": "✅ File received. We'll review it shortly.",
    },
    "file_failed": {
        "fr": "❌ Désolé, nous n'avons pas pu traiter le fichier.",
        "ht": "❌ Regrèt, nou pa t kapab trete fichye a.",
        "en": "❌ Sorry, we could not process the file link.",
    },
    "help": {
        "fr": (
            "📚 *Commandes disponibles :*\n\n"
            "- /start – Redémarrer la session\n"
            "- /help – Afficher ce menu d'aide\n"
            "- /language – Choisir la langue\n"
            "- *certificat / diplôme / attestation* – Obtenez votre certificat\n"
            "- *transcript / schedule* – Demander des documents\n"
            "- *examens / paiement / vacances* – Dates importantes\n\n"
            "Si vous ne savez pas quoi écrire, posez simplement votre question."
        ),
        "ht": (
            "📚 *Kòmand disponib :*\n\n"
            "- /start – Rekòmanse sesyon an\n"
            "- /help – Montre meni èd la\n"
            "- /language – Chwazi lang\n"
            "- *sètifika / diplòm / atestasyon* – Jwenn sètifika ou\n"
            "- *transcript / schedule* – Mande dokiman\n"
            "- *egzamen / peyman / vakans* – Dat enpòtan\n\n"
            "Si ou pa sèten, jis poze kesyon ou."
        ),
        "en": (
            "📚 *Available Commands:*\n\n"
            "- /start – Restart the session\n"
            "- /help – Show this help menu\n"
            "- /language – Choose your language\n"
            "- *certificate / certificat / sètifika* – Get your certificate\n"
            "- *transcript / schedule* – Request documents\n"
            "- *exam / payment / holiday* – Important dates\n\n"
            "If you're unsure, just type your question."
        ),
    },
}

# Admin notices are always sent in English
ADMIN_NOTICES = {
    "login": "🟢 *Login approved*\n👤 {name}\n🆔 {credential_id}",
    "email": "📩 *New Email*\nID: {user_id}\n📧 {email}",
    "file": "📄 *New file from {name}*\nID: {user_id}\n📎 {url}",
}


def get_message(key: str, lang: str = DEFAULT_LANGUAGE, **kwargs) -> str:
    """Return the template for ``key`` in ``lang``, falling back to English."""
    variants = MESSAGES[key]
    template = variants.get(lang) or variants[DEFAULT_LANGUAGE]
    return template.format(**kwargs) if kwargs else template


def admin_notice(key: str, **kwargs) -> str:
    return ADMIN_NOTICES[key].format(**kwargs)
