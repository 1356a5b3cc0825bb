"""
Dialogue messages - single source of truth.

This module contains the fixed prompts and re-prompts used by the dialogue
handlers. Import from here instead of hardcoding strings in handlers.
"""


class DialogueMessages:
    """Standard messages for the gift card flows."""

    # Entry and restart
    WELCOME = (
        "👋 Welcome to Amazon Pay Gift Cards – powered by Pine Labs!\n"
        "🎁 The simplest way to buy, gift, and share Amazon Pay Gift Cards – "
        "anytime, anywhere.\n\n"
        "Please tell us who you're buying for:\n\n"
        "1️⃣ For Myself / Friends & Family\n"
        "2️⃣ For Business / Employees / Clients\n\n"
        "👉 Just reply with 1 or 2 to continue."
    )
    SAY_HI = "Please say 'hi' to begin."
    BUYER_TYPE_RETRY = "Please choose Personal/Self or Business."
    READY_FOR_NEW_ORDER = "Say 'hi' to start a new gift card."
    CANCELLED = "Cancelled. Say 'hi' to start again."
    INTERNAL_ERROR = "Something went wrong. Please try again."

    # Personal flow
    OCCASION = "For what occasion you want to buy a gift card?"
    OCCASION_CUSTOM = "Please enter the occasion."
    TEMPLATE = "Choose a gift card template."
    TEMPLATE_RETRY = "Please select a template."
    AMOUNT = "Select the amount or enter a custom amount."
    AMOUNT_RETRY = "Please enter a valid amount."
    RECIPIENT = "Who would you like to send it to? Please enter recipient email id or phone number."
    RECIPIENT_RETRY = "Please provide a valid email address or phone number."
    GIFT_MESSAGE = "Please enter your gift card message (or type 'skip')."
    CONFIRM_RETRY = "Please reply with 'confirm' or 'cancel'."
    SUCCESS = "🎉 Success! Your gift card is on its way to the recipient."

    # Business flow
    LEAD = "Great! Please share your business details to get started."
    LEAD_RETRY = "Please fill in your name, company, official email and phone number."
    VERIFICATION = (
        "To enable bulk orders & GST-invoicing safely, we verify your company details. "
        "Please share your GSTIN, bank account and IFSC code."
    )
    VERIFICATION_RETRY = "Please fill in your GSTIN, bank account and IFSC code."
    VERIFICATION_FAILED = (
        "❌ Cannot verify your business details. Please go back and enter correct details."
    )
    VERIFIED = "✅ Successfully verified your business."
    ORDER_LINES = "Please enter the denominations and number of gift cards you need."
    DELIVERY_EMAIL = (
        "Gift card codes will be delivered to {email}. "
        "Reply 'continue' to keep it or type a different email."
    )
    DELIVERY_EMAIL_RETRY = "Please reply 'continue' or enter a valid delivery email."
    DELIVERY_DATE = "When should we deliver the gift cards? Reply 'now' or a date as YYYY-MM-DD."
    DELIVERY_DATE_RETRY = "Please reply 'now' or enter a date in YYYY-MM-DD format."
    QUOTATION_RETRY = "Reply 'accept' to proceed, 'edit' to change the order or 'cancel' to abort."
    PROFORMA_ISSUED = (
        "📄 Your Proforma Invoice {number} is ready. "
        "Please upload your Purchase Order (PDF) or reply 'skip'."
    )
    PURCHASE_ORDER_RETRY = "Please upload your Purchase Order as a PDF or reply 'skip'."
    PAYMENT = (
        "💳 Before completing your payment, please keep in mind:\n"
        "1. Carefully review your PI to ensure all details are correct.\n"
        "2. For bank transfers, use the same GST company account shared during verification.\n"
        "3. You can also pay conveniently using a Credit Card."
    )
    PAYMENT_RETRY = "Please choose NEFT / Netbanking or Credit Card and enter the payment reference."
    FEEDBACK = "How was your experience? Rate us from 1 to 5, or reply 'skip'."
    FEEDBACK_RETRY = "Please reply with a rating from 1 to 5, or 'skip'."
    THANKS = "🙏 Thank you for your order! Say 'hi' whenever you want to buy more gift cards."
